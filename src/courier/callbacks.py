"""Ready-made pre-callbacks.

The core is method-agnostic: every message is reachable with any HTTP
method unless a callback says otherwise. These cover the common setup::

    app.add_global_pre(require_post)
    app.add_global_pre(json_content_type)
"""

from courier.context import Context
from courier.http.request import Request
from courier.http.writer import ResponseWriter


def require_post(ctx: Context, request: Request, writer: ResponseWriter) -> bool:
    """Answer anything but POST with 405 and stop the pipeline."""
    if request.method != "POST":
        writer.write_header(405)
        writer.set_header("allow", "POST")
        return False
    return True


def json_content_type(ctx: Context, request: Request, writer: ResponseWriter) -> bool:
    """Set ``Content-Type: application/json`` up front."""
    writer.set_header("content-type", "application/json")
    return True
