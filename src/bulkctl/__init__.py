"""bulkctl — batch text commands from a stream into joined bulk lines."""

__version__ = "0.1.0"
