"""Endpoint modules grouped by resource."""
