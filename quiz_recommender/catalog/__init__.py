"""Read-only course and book catalogs consumed by the scorers."""
