"""Core schema and content logic."""
