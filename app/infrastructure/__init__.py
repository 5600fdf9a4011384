"""Infrastructure: persistence, security and background services."""
