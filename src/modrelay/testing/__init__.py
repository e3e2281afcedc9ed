"""Test utilities for modrelay applications.

    from modrelay.testing import TestClient
"""

from modrelay.testing.client import TestClient

__all__ = ["TestClient"]
