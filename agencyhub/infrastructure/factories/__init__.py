"""Factories assembling application services."""
