"""Command-line surface for the resolution engine."""
