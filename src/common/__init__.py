"""Shared helpers: HTTP fetching and logging."""
