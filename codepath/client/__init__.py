"""Async client and state mirrors for the codepath API."""

from codepath.client.api_client import CodepathClient
from codepath.client.fallback import (
    EmptyFallback,
    FallbackProvider,
    SampleDataFallback,
    StaticFallback,
)
from codepath.client.stores import ContentState, ContentStore, UserState, UserStore

__all__ = [
    "CodepathClient",
    "ContentState",
    "ContentStore",
    "EmptyFallback",
    "FallbackProvider",
    "SampleDataFallback",
    "StaticFallback",
    "UserState",
    "UserStore",
]
