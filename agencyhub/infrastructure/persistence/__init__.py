"""Persistence adapters over the document store."""
