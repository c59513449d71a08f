"""Utility helpers: configuration, credential storage and did parsing."""
