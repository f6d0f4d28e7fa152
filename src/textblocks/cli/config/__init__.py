"""Inspect and validate configuration."""
