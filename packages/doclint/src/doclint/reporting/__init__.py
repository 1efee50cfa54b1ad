"""Recording and rendering of check outcomes."""
