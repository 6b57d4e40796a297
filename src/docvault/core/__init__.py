"""Core building blocks: exceptions and identifiers."""
