"""Invoke helper — call sync or async user code uniformly.

Callbacks and procedures can be ``def`` or ``async def``. Any code that
calls one of them goes through ``invoke`` so the sync/async check lives
in exactly one place.

Usage::

    from courier._internal.invoke import invoke

    keep_going = await invoke(callback, ctx, request, writer)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
