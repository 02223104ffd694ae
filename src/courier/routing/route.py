"""PendingMessage and CompiledRoute frozen dataclasses."""

from dataclasses import dataclass

from courier._internal.types import Callback, Procedure


@dataclass(frozen=True, slots=True)
class PendingMessage:
    """A registered message waiting to be compiled.

    Option lists are copied into tuples at registration, so editing the
    ``HandlerOptions`` afterwards has no effect.
    """

    name: str
    procedure: Procedure
    clear_pre: bool = False
    clear_post: bool = False
    pre: tuple[Callback, ...] = ()
    post: tuple[Callback, ...] = ()


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A message compiled into its final pipeline. Never changes."""

    url: str
    name: str
    pre: tuple[Callback, ...]
    procedure: Procedure
    post: tuple[Callback, ...]
