"""Infrastructure layer: cache storage and lookup backends."""
