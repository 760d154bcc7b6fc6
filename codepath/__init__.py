"""codepath: programming-language learning platform backend and client."""

__version__ = "0.1.0"
