"""Domain models: world definitions and player state."""
