"""Persistence: SQLAlchemy engine, ORM models, player state store."""
