"""Infrastructure: configuration, settings and credential hashing."""
