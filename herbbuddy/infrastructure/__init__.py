"""Infrastructure: key-value storage adapters and the expiring cache store."""
