"""HTTP command layer for Ringside."""
