"""Test utilities for switchyard applications.

::

    from switchyard.testing import TestClient, make_request
"""

from switchyard.testing.client import TestClient
from switchyard.testing.requests import make_request

__all__ = ["TestClient", "make_request"]
