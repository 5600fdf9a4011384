"""Hotel directory service: scoped access control and audit."""
