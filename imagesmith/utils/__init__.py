"""
imagesmith Utils - Logging, identifiers and redaction helpers.
"""
