"""Unit tests for the authentication adapter."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from routinelog.apis.AuthApi import AuthApi, map_provider_error
from routinelog.config.env_loader import MissingEnvironmentError
from routinelog.exceptions import AuthError


def provider_response(status_code=200, json_body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_body or {}
    response.text = ""
    return response


def provider_error(message):
    return provider_response(400, {"error": {"code": 400, "message": message}})


def signed_in(uid="uid-1", email="alice@routinelog.app", token="token-1"):
    return provider_response(200, {"localId": uid, "email": email, "idToken": token, "refreshToken": "r-1"})


@pytest.fixture
def auth(monkeypatch, app_config):
    monkeypatch.delenv("FIREBASE_AUTH_EMULATOR_HOST", raising=False)
    return AuthApi(api_key="test-key", config=app_config)


class TestUsernames:

    def test_username_to_email(self, auth):
        assert auth.username_to_email("  Alice ") == "alice@routinelog.app"

    def test_email_to_username(self):
        assert AuthApi.email_to_username("alice@routinelog.app") == "alice"

    def test_api_key_required_outside_emulator(self, monkeypatch, app_config):
        monkeypatch.delenv("FIREBASE_AUTH_EMULATOR_HOST", raising=False)
        monkeypatch.delenv("FIREBASE_API_KEY", raising=False)
        with pytest.raises(MissingEnvironmentError) as exc:
            AuthApi(config=app_config)
        assert "FIREBASE_API_KEY" in str(exc.value)

    def test_emulator_base_url(self, monkeypatch, app_config):
        monkeypatch.setenv("FIREBASE_AUTH_EMULATOR_HOST", "localhost:9099")
        auth = AuthApi(config=app_config)
        assert auth.base_url == "http://localhost:9099/identitytoolkit.googleapis.com/v1"


class TestSessions:

    @patch("requests.post")
    def test_login(self, mock_post, auth):
        mock_post.return_value = signed_in()

        session = auth.login("Alice", "secret1")

        assert session.uid == "uid-1" and session.username == "alice"
        assert auth.current_session == session
        url = mock_post.call_args.args[0]
        assert url == "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"
        assert mock_post.call_args.kwargs["params"] == {"key": "test-key"}
        assert mock_post.call_args.kwargs["json"]["email"] == "alice@routinelog.app"

    @patch("requests.post")
    def test_register(self, mock_post, auth):
        mock_post.return_value = signed_in(uid="uid-new")
        session = auth.register("alice", "secret1")
        assert session.uid == "uid-new"
        assert mock_post.call_args.args[0].endswith("accounts:signUp")

    @patch("requests.post")
    def test_logout_is_idempotent(self, mock_post, auth):
        mock_post.return_value = signed_in()
        auth.login("alice", "secret1")
        auth.logout()
        auth.logout()
        assert auth.current_session is None

    @patch("requests.post")
    def test_delete_account_reauthenticates_first(self, mock_post, auth):
        mock_post.side_effect = [signed_in(token="old"), signed_in(token="fresh"), provider_response(200, {})]
        auth.login("alice", "secret1")

        auth.delete_account("alice", "secret1")

        endpoints = [call.args[0].rsplit("/", 1)[1] for call in mock_post.call_args_list]
        assert endpoints == ["accounts:signInWithPassword", "accounts:signInWithPassword", "accounts:delete"]
        assert mock_post.call_args.kwargs["json"] == {"idToken": "fresh"}
        assert auth.current_session is None

    def test_delete_account_requires_session(self, auth):
        with pytest.raises(AuthError) as exc:
            auth.delete_account("alice", "secret1")
        assert exc.value.code == "auth/no-current-user"

    @patch("requests.post")
    def test_reauthenticate_wrong_account(self, mock_post, auth):
        mock_post.side_effect = [signed_in(uid="uid-1"), signed_in(uid="uid-2")]
        auth.login("alice", "secret1")
        with pytest.raises(AuthError) as exc:
            auth.reauthenticate("bob", "secret1")
        assert exc.value.code == "auth/user-mismatch"
        assert auth.current_session.uid == "uid-1"


class TestErrors:

    @pytest.mark.parametrize("provider_code, expected", [
        ("INVALID_LOGIN_CREDENTIALS", "auth/invalid-credential"),
        ("INVALID_PASSWORD", "auth/wrong-password"),
        ("EMAIL_NOT_FOUND", "auth/user-not-found"),
        ("TOO_MANY_ATTEMPTS_TRY_LATER", "auth/too-many-requests"),
        ("EMAIL_EXISTS", "auth/email-already-in-use"),
        ("WEAK_PASSWORD : Password should be at least 6 characters", "auth/weak-password"),
        ("INVALID_EMAIL", "auth/invalid-email"),
        ("USER_DISABLED", "auth/user-disabled"),
        ("CREDENTIAL_TOO_OLD_LOGIN_AGAIN", "auth/requires-recent-login"),
    ])
    def test_provider_codes_mapped(self, provider_code, expected):
        error = map_provider_error(provider_code)
        assert error.code == expected
        assert error.details["provider_message"] == provider_code

    def test_unmapped_code_gets_generic_message(self):
        error = map_provider_error("SOMETHING_NEW")
        assert error.code == "auth/internal-error"
        assert error.message == "Something went wrong, please try again"

    @patch("requests.post")
    def test_rejected_login_keeps_signed_out(self, mock_post, auth):
        mock_post.return_value = provider_error("INVALID_LOGIN_CREDENTIALS")
        with pytest.raises(AuthError) as exc:
            auth.login("alice", "wrong")
        assert exc.value.code == "auth/invalid-credential"
        assert auth.current_session is None

    @patch("requests.post")
    def test_network_failure(self, mock_post, auth):
        mock_post.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(AuthError) as exc:
            auth.login("alice", "secret1")
        assert exc.value.code == "auth/network-request-failed"
