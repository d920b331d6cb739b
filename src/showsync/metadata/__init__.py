"""Metadata providers used to suggest show names for unknown folders."""
