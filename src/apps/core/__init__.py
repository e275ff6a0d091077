"""Cross-cutting infrastructure: middleware, API error handling and health checks."""
