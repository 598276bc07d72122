"""Shared helpers used across DMS features."""
