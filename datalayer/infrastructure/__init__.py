"""Infrastructure layer: httpx clients and logging."""
