"""Shared type aliases used across courier modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from courier.context import Context
    from courier.http.request import Request
    from courier.http.writer import ResponseWriter

# Pipeline stage run before or after the procedure; returns False to stop
Callback: TypeAlias = Callable[["Context", "Request", "ResponseWriter"], Any]

# Business logic bound to one message: (context, raw body) -> reply
Procedure: TypeAlias = Callable[["Context", bytes], Any]
