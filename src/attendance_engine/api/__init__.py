"""HTTP reporting surface."""
