"""Endpoint modules for the inventory REST API."""
