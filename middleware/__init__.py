"""HTTP middleware for request ids, error handling and request logging."""
