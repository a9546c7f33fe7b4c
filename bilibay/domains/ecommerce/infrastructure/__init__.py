"""
Marketplace infrastructure: SQLAlchemy adapters for the application ports.
"""
