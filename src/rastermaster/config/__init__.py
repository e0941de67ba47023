"""Persisted tool settings."""
