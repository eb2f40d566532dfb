"""
Shared helpers: exception types and command decorators.
"""
