"""Blog posts resource: persistence, validation and the REST API."""
