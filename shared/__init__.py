"""Shared models, configuration and utilities."""
