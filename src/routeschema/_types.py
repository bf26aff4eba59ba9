"""Shared type definitions for routeschema."""

from collections.abc import Awaitable, Callable
from typing import Literal

# Normalized absolute directory path used as a cache key
type DirKey = str

# HTTP method names recognised in route handler files
type HttpMethod = Literal["GET", "HEAD", "OPTIONS", "POST", "PUT", "DELETE", "PATCH"]

# Query contract type names exported from endpoint files
type QueryTypeName = Literal["Query", "OptionalQuery"]

# Zero-argument regenerate hook driven by the watch session
type RegenerateFunc = Callable[[], Awaitable[None] | None]
