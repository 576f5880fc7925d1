"""Core infrastructure: configuration, logging and the error model."""
