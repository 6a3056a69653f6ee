"""Tests for user account commands."""

from __future__ import annotations

import pytest

from paasctl.auth.session_store import SessionStore


class TestUserCreate:
    def test_success(self, invoke, api) -> None:
        api.add("POST", "/users", status=201)

        result = invoke(["user-create", "x@y.com"], input="pw123\npw123\n")

        assert result.exit_code == 0, result.output
        assert 'User "x@y.com" successfully created!' in result.stdout
        assert "Password: " in result.output
        assert "Confirm: " in result.output
        assert api.body(api.find("POST", "/users")) == {"email": "x@y.com", "password": "pw123"}

    def test_mismatch_sends_nothing(self, invoke, api) -> None:
        result = invoke(["user-create", "x@y.com"], input="one\ntwo\n")

        assert result.exit_code == 2
        assert "Passwords didn't match." in result.output
        assert not api.sent("POST", "/users")

    def test_empty_confirmation(self, invoke, api) -> None:
        result = invoke(["user-create", "x@y.com"], input="one\n\n")

        assert result.exit_code == 2
        assert "You must provide the password!" in result.output
        assert not api.sent("POST", "/users")

    @pytest.mark.parametrize("status", [404, 405])
    def test_creation_disabled(self, invoke, api, status: int) -> None:
        api.add("POST", "/users", status=status, text="method not allowed")

        result = invoke(["user-create", "x@y.com"], input="pw\npw\n")

        assert result.exit_code == 1
        assert "User creation is disabled." in result.output

    def test_server_error(self, invoke, api) -> None:
        api.add("POST", "/users", status=409, text="This email is already registered")

        result = invoke(["user-create", "x@y.com"], input="pw\npw\n")

        assert result.exit_code == 5
        assert "This email is already registered" in result.output


class TestUserRemove:
    def test_confirmed(self, invoke, api, session_store: SessionStore) -> None:
        session_store.persist("tok")
        api.add("DELETE", "/users")

        result = invoke(["user-remove"], input="y\n")

        assert result.exit_code == 0, result.output
        assert "(y/n)" in result.output
        assert "User successfully removed." in result.stdout
        assert api.find("DELETE", "/users").headers["authorization"] == "bearer tok"
        assert not session_store.exists()

    @pytest.mark.parametrize("answer", ["n\n", "yes\n", "Y\n", "\n", ""])
    def test_anything_but_y_aborts(self, invoke, api, session_store: SessionStore, answer: str) -> None:
        session_store.persist("tok")

        result = invoke(["user-remove"], input=answer)

        assert result.exit_code == 0
        assert "Abort." in result.stdout
        assert not api.sent("DELETE", "/users")
        assert session_store.exists()

    def test_force_skips_question(self, invoke, api, session_store: SessionStore) -> None:
        session_store.persist("tok")
        api.add("DELETE", "/users")

        result = invoke(["--force", "user-remove"])

        assert result.exit_code == 0, result.output
        assert "(y/n)" not in result.output
        assert api.sent("DELETE", "/users")

    def test_failure_keeps_session(self, invoke, api, session_store: SessionStore) -> None:
        session_store.persist("tok")
        api.add("DELETE", "/users", status=500, text="cannot remove")

        result = invoke(["user-remove"], input="y\n")

        assert result.exit_code == 5
        assert "cannot remove" in result.output
        assert session_store.exists()


class TestChangePassword:
    def test_success(self, invoke, api, session_store: SessionStore) -> None:
        session_store.persist("tok")
        api.add("PUT", "/users/password")

        result = invoke(["change-password"], input="gopher\nbbrothers\nbbrothers\n")

        assert result.exit_code == 0, result.output
        assert "Password successfully updated!" in result.stdout
        for label in ("Current password: ", "New password: ", "Confirm: "):
            assert label in result.output
        request = api.find("PUT", "/users/password")
        assert api.body(request) == {"old": "gopher", "new": "bbrothers"}
        assert request.headers["authorization"] == "bearer tok"

    def test_mismatch_sends_nothing(self, invoke, api) -> None:
        result = invoke(["change-password"], input="gopher\nblood\nsugar\n")

        assert result.exit_code == 2
        assert "New password and password confirmation didn't match." in result.output
        assert not api.sent("PUT", "/users/password")

    def test_rejected(self, invoke, api) -> None:
        api.add("PUT", "/users/password", status=403, text="the given password didn't match")

        result = invoke(["change-password"], input="bad\nnew\nnew\n")

        assert result.exit_code == 3
        assert "the given password didn't match" in result.output


class TestResetPassword:
    def test_start(self, invoke, api) -> None:
        api.add("POST", "/users/x@y.com/password")

        result = invoke(["reset-password", "x@y.com"])

        assert result.exit_code == 0, result.output
        assert "You've successfully started the password reset process." in result.stdout
        assert "Please check your email." in result.stdout
        assert "token" not in api.find("POST", "/users/x@y.com/password").url.params

    @pytest.mark.parametrize("flag", ["--token", "-t"])
    def test_with_token(self, invoke, api, flag: str) -> None:
        api.add("POST", "/users/x@y.com/password")

        result = invoke(["reset-password", "x@y.com", flag, "t0k"])

        assert result.exit_code == 0, result.output
        assert "Your password has been reset and mailed to you." in result.stdout
        assert api.find("POST", "/users/x@y.com/password").url.params["token"] == "t0k"

    def test_unknown_user(self, invoke, api) -> None:
        result = invoke(["reset-password", "ghost@y.com"])

        assert result.exit_code == 4
        assert "not found" in result.output
