"""
Services Layer
Read-only query helpers used primarily by routes and the CLI.

Services should:
- Not modify data
- Read from several models to shape results for callers
- Be stateless
"""
