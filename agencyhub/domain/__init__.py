"""Domain layer: entities, policies, ports and pure services."""
