"""Presentation layer: JSON routes over the business managers"""
