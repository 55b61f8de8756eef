"""Persistence layer: SQLAlchemy models and database session management."""
