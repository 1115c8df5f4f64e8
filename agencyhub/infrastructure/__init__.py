"""Infrastructure adapters, persistence and providers."""
