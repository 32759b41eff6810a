"""HTTP surface for the resolution engine."""
