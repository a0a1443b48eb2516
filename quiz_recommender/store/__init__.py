"""Read-only access to the client-side quiz state store."""
