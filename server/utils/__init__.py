"""Shared server utilities."""
