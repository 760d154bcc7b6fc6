"""Learning progress domain layer."""
