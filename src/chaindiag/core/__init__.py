"""Core computation for chaindiag (no rendering, no I/O)."""
