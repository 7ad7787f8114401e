"""Monitor REST routes."""
