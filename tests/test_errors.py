"""Tests for modrelay.errors — exception hierarchy and messages."""

import pytest

from modrelay.errors import ConfigurationError, HTTPError, ModRelayError, NotFound


class TestHierarchy:
    def test_http_error_is_modrelay_error(self) -> None:
        assert issubclass(HTTPError, ModRelayError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_configuration_error_is_modrelay_error(self) -> None:
        assert issubclass(ConfigurationError, ModRelayError)


class TestHTTPError:
    def test_status_and_detail(self) -> None:
        err = HTTPError(status=400, detail="Bad request")
        assert err.status == 400
        assert err.detail == "Bad request"

    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request")) == "400: Bad request"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]


class TestNotFound:
    def test_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"

    def test_custom_detail(self) -> None:
        assert NotFound("/x.js not found").detail == "/x.js not found"

    async def test_unhandled_path_response(self, project, non_local_runtime) -> None:
        from modrelay.app import App
        from modrelay.config import AppConfig
        from modrelay.testing import TestClient

        app = App(AppConfig(root=project, debug=True), runtime=non_local_runtime)
        async with TestClient(app) as client:
            response = await client.get("/missing.css")

        assert response.status == 404
        assert response.text == "404: /missing.css not found"
