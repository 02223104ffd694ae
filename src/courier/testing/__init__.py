"""Test utilities for courier applications::

    from courier.testing import TestClient
"""

from courier.testing.client import TestClient, TestResponse

__all__ = [
    "TestClient",
    "TestResponse",
]
