"""Core helpers shared by every layer."""
