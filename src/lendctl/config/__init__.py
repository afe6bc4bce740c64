"""Configuration — settings models, discovery, and logging."""
