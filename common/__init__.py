"""Shared helpers used by every flint entry point."""
