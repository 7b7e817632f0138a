"""Core infrastructure: configuration and database."""
