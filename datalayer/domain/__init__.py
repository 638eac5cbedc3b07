"""Domain layer: entities and exceptions, free of transport concerns."""
