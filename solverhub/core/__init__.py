"""
Core module - configuration, logging, errors, identity and sessions.
"""
