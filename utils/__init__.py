"""Shared helpers: logging, errors and text scanning."""
