"""Core infrastructure: settings, logging, database access and domain errors."""
