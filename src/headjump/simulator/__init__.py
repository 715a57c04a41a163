"""Desktop window for Head Jump."""
