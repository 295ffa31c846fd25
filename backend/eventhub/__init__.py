"""Eventhub: event management REST API."""
