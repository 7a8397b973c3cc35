"""HTTP serving layer."""
