"""Core data models and errors."""
