"""Content catalog domain layer."""
