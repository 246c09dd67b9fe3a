"""Domain layer — commands and batch joining rules.

This layer depends only on stdlib.
It must never import from pipeline, services, commands, or config.
"""
