"""Single-user task tracker persisted to a local flat file."""

__version__ = "0.1.0"
