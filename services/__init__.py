"""
Service layer for QCloud API calls and credential lookup.

This module keeps network and AWS access apart from request building
and signing, which are pure functions.
"""
