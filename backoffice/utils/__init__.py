"""Command line helpers"""
