"""
Services module - data access and pure list filtering.
"""
