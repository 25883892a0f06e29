"""Constants and mathematical helpers."""
