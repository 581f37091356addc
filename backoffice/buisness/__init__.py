"""
Domain layer for the back-office system.
Contains the managers and rules that change stock, batches, orders and parties,
separated from data persistence concerns.
"""
