"""Outbound collaborator adapters."""
