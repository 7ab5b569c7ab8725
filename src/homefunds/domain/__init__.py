"""Domain layer: store contracts consumed by the services."""
