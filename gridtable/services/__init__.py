"""Table pipeline services."""
