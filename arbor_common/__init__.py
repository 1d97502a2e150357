"""Shared libraries for Arbor services."""
