"""Configuration layer: discovery, settings, and logging."""
