"""Application layer: use-case services and reporters."""
