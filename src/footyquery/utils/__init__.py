"""
Shared helpers for FootyQuery (logging, paths).
"""
