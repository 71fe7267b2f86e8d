"""Application layer: ports (protocols), services and DTOs."""
