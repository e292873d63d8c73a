"""Logging, JSON export and time formatting helpers."""
