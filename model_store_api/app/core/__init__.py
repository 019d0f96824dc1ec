"""
Core utilities: settings, logging, SQLite helpers, exceptions and the
reader/writer lock.
"""
