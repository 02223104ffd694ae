"""Echo — a single message behind method, content-type, and timing callbacks.

Demonstrates global pre/post callbacks running in registration order,
typed context keys shared between callbacks, and a procedure that
replies with a status code when the payload is unparseable.

Run:
    python app.py
    curl -X POST localhost:8080/echo -d '{"Token": "abc"}'
"""

import json
import logging
import time
from dataclasses import dataclass
from http import HTTPStatus

from courier import App, AppConfig, ContextKey
from courier.callbacks import json_content_type, require_post

logger = logging.getLogger("courier.examples.echo")

BEGIN: ContextKey[float] = ContextKey("begin")
ELAPSED_MS: ContextKey[float] = ContextKey("elapsed_ms")

app = App(AppConfig(port=8080))


@dataclass
class EchoReply:
    Result: int
    Description: str


def stamp_begin(ctx, request, writer):
    ctx[BEGIN] = time.monotonic()
    return True


def log_elapsed(ctx, request, writer):
    if BEGIN in ctx:
        ctx[ELAPSED_MS] = (time.monotonic() - ctx[BEGIN]) * 1000
        logger.info("%s took %.3fms", ctx.path, ctx[ELAPSED_MS])
    return True


app.add_global_pre(require_post)
app.add_global_pre(json_content_type)
app.add_global_pre(stamp_begin)
app.add_global_post(log_elapsed)


@app.message("echo")
def echo(ctx, payload: bytes):
    try:
        msg = json.loads(payload)
    except ValueError:
        return HTTPStatus.BAD_REQUEST
    if not isinstance(msg, dict):
        return HTTPStatus.BAD_REQUEST
    return EchoReply(Result=0, Description="OK")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.compile_and_listen()
