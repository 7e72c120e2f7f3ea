"""Courier position adapters."""
