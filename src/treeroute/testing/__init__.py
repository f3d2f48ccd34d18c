"""Test utilities for treeroute applications.

::

    from treeroute.testing import TestClient
"""

from treeroute.testing.client import TestClient

__all__ = ["TestClient"]
