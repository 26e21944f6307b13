"""Process-wide runtime services."""
