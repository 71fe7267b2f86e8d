"""Infrastructure layer: in-memory stores, adapters and observability."""
