"""Domain layer: statistics models and pure services."""
