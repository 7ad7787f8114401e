"""Infrastructure layer: database, store, and outbound mail."""
