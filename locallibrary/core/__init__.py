"""Configuration, exceptions and error handlers."""
