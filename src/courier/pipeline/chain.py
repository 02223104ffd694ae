"""Callback chain execution.

A chain is an ordered tuple of callbacks. Each one receives the shared
context and the transport objects and returns whether the pipeline
should keep going.
"""

from collections.abc import Iterable

from courier._internal.invoke import invoke
from courier._internal.types import Callback
from courier.context import Context
from courier.http.request import Request
from courier.http.writer import ResponseWriter


async def run_chain(
    chain: Iterable[Callback],
    ctx: Context,
    request: Request,
    writer: ResponseWriter,
) -> bool:
    """Run *chain* in order, stopping at the first callback that returns falsy.

    Returns ``True`` only if every callback returned truthy. Whatever the
    callbacks before the stop point did to *ctx* or *writer* is kept.
    """
    for callback in chain:
        if not await invoke(callback, ctx, request, writer):
            return False
    return True
