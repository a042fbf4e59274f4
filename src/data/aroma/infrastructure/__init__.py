"""Infrastructure adapters for the Aroma data-access context."""
