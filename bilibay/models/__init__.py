"""
Data models: SQLAlchemy tables (``bilibay.models.db``) and API payloads.
"""
