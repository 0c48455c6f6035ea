"""
Data layer: SQLAlchemy models and storage-level counters
"""
