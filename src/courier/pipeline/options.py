"""Per-message pipeline options."""

from dataclasses import dataclass, field

from courier._internal.types import Callback


@dataclass(slots=True)
class HandlerOptions:
    """Overrides applied to one message when it is compiled.

    By default a message inherits the full global chains with nothing
    added. ``clear_pre`` / ``clear_post`` drop the global chain for this
    message; the local lists are appended after whatever global chain
    remains::

        opts = HandlerOptions(clear_pre=True).add_pre(check_token)
        registry.register("login", login, opts)
    """

    clear_pre: bool = False
    clear_post: bool = False
    pre: list[Callback] = field(default_factory=list)
    post: list[Callback] = field(default_factory=list)

    def add_pre(self, callback: Callback) -> "HandlerOptions":
        """Append a callback to this message's pre-chain."""
        self.pre.append(callback)
        return self

    def add_post(self, callback: Callback) -> "HandlerOptions":
        """Append a callback to this message's post-chain."""
        self.post.append(callback)
        return self
