"""Training-load domain logic: load computation, record validation, dashboard aggregates."""
