"""Adapters for presenting results."""
