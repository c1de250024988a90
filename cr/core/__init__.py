"""Core types: results, exit codes, step inputs and environment config."""
