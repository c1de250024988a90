"""GitHub Releases API access."""
