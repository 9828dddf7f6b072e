"""HTTP surface for the narrator."""
