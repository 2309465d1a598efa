"""Configuration loading, validation and system definitions."""
