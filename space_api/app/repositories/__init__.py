"""Persistence layer: sqlite-backed repositories used by the services."""
