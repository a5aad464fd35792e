"""Console presentation adapter."""
