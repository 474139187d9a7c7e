"""Configuration — settings, key bindings, logging."""
