"""Dispatcher — runs one compiled route for one request.

Stages, in order::

    RECEIVED -> PRE_CHAIN -> BODY_READ -> PROCEDURE -> REPLY -> POST_CHAIN -> DONE

Early exits to DONE:

- PRE_CHAIN: a callback returned False. Whatever it wrote is sent.
- BODY_READ: the body could not be read (417) or was too large (413).
- PROCEDURE: the procedure returned a bare status code (or raised
  ``HTTPError``). The status is sent with an empty body; the post-chain
  does not run.
- REPLY: the transport closed while sending. Nothing else is sent.

The post-chain runs after the response is committed, so it can only do
bookkeeping; returning False just skips the rest of the post-chain.
"""

import dataclasses
import enum
import json as json_module
import logging
import time
from typing import Any

from courier._internal.asgi import Receive, Scope, Send
from courier._internal.invoke import invoke
from courier.config import AppConfig
from courier.context import Context, context_var
from courier.errors import HTTPError, ReplyEncodingError
from courier.http.request import Request
from courier.http.writer import ResponseWriter
from courier.pipeline.chain import run_chain
from courier.routing.route import CompiledRoute
from courier.routing.table import DispatchTable

logger = logging.getLogger("courier.server")

JSON_CONTENT_TYPE = "application/json"


class Stage(enum.Enum):
    """Where a dispatch is, or where it stopped."""

    RECEIVED = "received"
    PRE_CHAIN = "pre_chain"
    BODY_READ = "body_read"
    PROCEDURE = "procedure"
    REPLY = "reply"
    POST_CHAIN = "post_chain"
    DONE = "done"


def is_status_reply(reply: Any) -> bool:
    """A bare status code: any ``int`` (``HTTPStatus`` included) except ``bool``."""
    return isinstance(reply, int) and not isinstance(reply, bool)


def _encode_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def encode_reply(reply: Any, url: str) -> bytes:
    """Encode a procedure's reply as compact JSON.

    Handles anything ``json`` does, plus dataclass instances and objects
    with a ``to_dict()`` method. Raises ``ReplyEncodingError`` otherwise.
    """
    try:
        text = json_module.dumps(
            reply, default=_encode_default, separators=(",", ":"), allow_nan=False
        )
    except (TypeError, ValueError) as exc:
        raise ReplyEncodingError(url, reply) from exc
    return text.encode("utf-8")


async def _reply_status(writer: ResponseWriter, status: int) -> None:
    """Send *status* with an empty body, unless a response already went out."""
    if writer.committed:
        return
    writer.write_header(status)
    writer.discard_body()
    await writer.commit()


async def dispatch(
    route: CompiledRoute,
    request: Request,
    writer: ResponseWriter,
    *,
    max_content_length: int | None = None,
) -> Stage:
    """Run *route*'s pipeline for *request*.

    Returns the last stage that ran before DONE. Raises
    ``ReplyEncodingError`` if the procedure's reply cannot be encoded,
    including a bare status outside 100..999.
    """
    ctx = Context(
        method=request.method,
        path=request.path,
        url=route.url,
        received_at=time.monotonic(),
    )
    token = context_var.set(ctx)
    try:
        return await _run_pipeline(route, ctx, request, writer, max_content_length)
    finally:
        context_var.reset(token)


async def _run_pipeline(
    route: CompiledRoute,
    ctx: Context,
    request: Request,
    writer: ResponseWriter,
    max_content_length: int | None,
) -> Stage:
    stage = Stage.PRE_CHAIN
    try:
        if not await run_chain(route.pre, ctx, request, writer):
            await writer.commit()
            return stage

        stage = Stage.BODY_READ
        payload = await request.body(max_content_length)

        stage = Stage.PROCEDURE
        reply = await invoke(route.procedure, ctx, payload)
    except HTTPError as exc:
        logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
        await _reply_status(writer, exc.status)
        return stage
    except Exception:
        logger.exception("500 %s %s (stage: %s)", request.method, request.path, stage.value)
        await _reply_status(writer, 500)
        return stage

    if is_status_reply(reply):
        if not 100 <= reply <= 999:
            raise ReplyEncodingError(route.url, reply)
        await _reply_status(writer, int(reply))
        return stage

    stage = Stage.REPLY
    body = encode_reply(reply, route.url)
    if "content-type" not in writer.headers:
        writer.set_header("content-type", JSON_CONTENT_TYPE)
    writer.write(body)
    if not await writer.commit():
        return stage

    stage = Stage.POST_CHAIN
    try:
        await run_chain(route.post, ctx, request, writer)
    except Exception:
        logger.exception("Post-chain failed for %s %s", request.method, request.path)
    return stage


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: DispatchTable,
    config: AppConfig,
) -> None:
    """Process a single HTTP scope: look up its route and dispatch it.

    Unknown paths get a 404 with an empty body.
    """
    if scope["type"] != "http":
        return

    start = time.perf_counter()
    request = Request.from_asgi(scope, receive)
    writer = ResponseWriter(send)

    route = table.lookup(request.path)
    if route is None:
        writer.write_header(404)
        await writer.commit()
        stage = Stage.RECEIVED
    else:
        stage = await dispatch(
            route,
            request,
            writer,
            max_content_length=config.max_content_length,
        )

    if config.access_log:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "%s %s %d %.2fms (stopped at %s)",
            request.method,
            request.path,
            writer.status,
            elapsed_ms,
            stage.value,
        )
