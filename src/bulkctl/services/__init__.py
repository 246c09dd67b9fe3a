"""Service layer: run results shared by the CLI and library callers."""
