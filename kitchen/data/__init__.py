"""
Data layer - records, initial data providers and the in-memory state container.
"""
