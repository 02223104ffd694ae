"""Routing — compiled routes and the exact-URL dispatch table.

Messages are registered during setup and compiled into an immutable
lookup structure when the registry freezes.
"""
