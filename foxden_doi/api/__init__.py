"""Clients for the FOXDEN services and DOI providers."""
