"""Shared business-layer pieces: exceptions, field validation, model mixins"""
