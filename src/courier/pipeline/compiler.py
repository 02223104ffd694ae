"""Pipeline compiler — merges global chains with per-message options.

Runs once, at freeze time. Each message gets its own snapshot of the
global chains, so nothing done to the registry afterwards can reach a
compiled route.
"""

import logging
from collections.abc import Iterable

from courier._internal.types import Callback
from courier.routing.route import CompiledRoute, PendingMessage
from courier.routing.table import DispatchTable

logger = logging.getLogger("courier.registry")


def resolve_chain(
    global_chain: Iterable[Callback],
    local_chain: Iterable[Callback],
    *,
    clear: bool,
) -> tuple[Callback, ...]:
    """Effective chain: the global chain (unless *clear*) followed by the local one."""
    inherited = () if clear else tuple(global_chain)
    return (*inherited, *local_chain)


def compile_route(
    pending: PendingMessage,
    *,
    prefix: str,
    global_pre: Iterable[Callback],
    global_post: Iterable[Callback],
) -> CompiledRoute:
    """Build the final pipeline for one pending message."""
    return CompiledRoute(
        url=f"{prefix}{pending.name}",
        name=pending.name,
        pre=resolve_chain(global_pre, pending.pre, clear=pending.clear_pre),
        procedure=pending.procedure,
        post=resolve_chain(global_post, pending.post, clear=pending.clear_post),
    )


def compile_routes(
    pending: Iterable[PendingMessage],
    *,
    prefix: str,
    global_pre: Iterable[Callback],
    global_post: Iterable[Callback],
) -> DispatchTable:
    """Compile every pending message and publish it into a sealed table.

    Raises ``RouteConflictError`` when two messages share a URL.
    """
    table = DispatchTable()
    pre = tuple(global_pre)
    post = tuple(global_post)
    for message in pending:
        route = compile_route(message, prefix=prefix, global_pre=pre, global_post=post)
        table.add(route)
        logger.info(
            "Route %s -> %s (pre=%d, post=%d)",
            route.url,
            getattr(route.procedure, "__name__", repr(route.procedure)),
            len(route.pre),
            len(route.post),
        )
    table.seal()
    return table
