"""Infrastructure: config files, schema validation and bot bundle loading."""
