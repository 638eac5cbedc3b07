"""Application layer: ports and wire schemas."""
