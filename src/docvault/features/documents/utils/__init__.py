"""Documents feature utilities."""
