"""Application layer: stale-while-revalidate loading and named domain caches."""
