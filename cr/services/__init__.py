"""Step services."""
