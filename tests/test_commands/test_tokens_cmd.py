"""Tests for API key commands."""

from __future__ import annotations

import pytest

from paasctl.auth.session_store import SessionStore


class TestTokenShow:
    def test_shows_key(self, invoke, api, session_store: SessionStore) -> None:
        session_store.persist("tok")
        api.add("GET", "/users/api-key", json_body="23iu4ydf")

        result = invoke(["token-show"])

        assert result.exit_code == 0, result.output
        assert "API key: 23iu4ydf" in result.stdout
        assert api.find("GET", "/users/api-key").headers["authorization"] == "bearer tok"

    def test_unexpected_status(self, invoke, api) -> None:
        api.add("GET", "/users/api-key", status=202, json_body="23iu4ydf")

        result = invoke(["token-show"])

        assert result.exit_code == 5
        assert "API key" not in result.stdout
        assert "Unexpected response status 202" in result.output

    def test_not_a_string(self, invoke, api) -> None:
        api.add("GET", "/users/api-key", json_body={"key": "x"})

        result = invoke(["token-show"])

        assert result.exit_code == 5
        assert "Unexpected API key format" in result.output


class TestTokenRegenerate:
    def test_regenerates(self, invoke, api) -> None:
        api.add("POST", "/users/api-key", json_body="n3wk3y")

        result = invoke(["token-regenerate"])

        assert result.exit_code == 0, result.output
        assert "Your new API key is: n3wk3y" in result.stdout

    @pytest.mark.parametrize("status", [201, 204])
    def test_unexpected_status(self, invoke, api, status: int) -> None:
        api.add("POST", "/users/api-key", status=status)

        result = invoke(["token-regenerate"])

        assert result.exit_code == 5
        assert "Your new API key" not in result.stdout

    def test_server_error(self, invoke, api) -> None:
        api.add("POST", "/users/api-key", status=500, text="key store down")

        result = invoke(["token-regenerate"])

        assert result.exit_code == 5
        assert "key store down" in result.output
