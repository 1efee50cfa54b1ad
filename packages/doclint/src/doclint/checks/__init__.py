"""File enumeration, content resolution and the house-style rules."""
