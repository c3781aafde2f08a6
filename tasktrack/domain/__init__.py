"""Domain layer for tasktrack: pure models, value objects and rules."""
