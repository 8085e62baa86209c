"""Environment-driven settings for the stack layout engine."""
