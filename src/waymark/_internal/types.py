"""Shared type aliases used across waymark modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# A step result is either the value itself or an awaitable that resolves to it
MaybeAwaitable: TypeAlias = Any | Awaitable[Any]

# Route handler: receives the built request, returns a response
Handler: TypeAlias = Callable[[Any], MaybeAwaitable]

# Before step: receives the request, returns a request (continue) or a response (stop)
BeforeStep: TypeAlias = Callable[[Any], MaybeAwaitable]

# After step: receives (request, response), returns a response
AfterStep: TypeAlias = Callable[[Any, Any], MaybeAwaitable]
