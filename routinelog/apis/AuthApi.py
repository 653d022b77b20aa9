"""Username/password authentication against Firebase Authentication.

Users pick a username; the identity provider only knows email addresses, so
every username is mapped to ``{username}@{auth.username_domain}``. Calls go to
the Identity Toolkit REST API, or to the Auth emulator when
``FIREBASE_AUTH_EMULATOR_HOST`` is set.
"""

from typing import Optional, Dict, Any

import requests

from routinelog.config.env_loader import get_required_env_var, get_optional_env_var
from routinelog.config.loader import AppConfig, load_app_config, get_username_domain
from routinelog.exceptions import AuthError
from routinelog.models.function_types import AuthSession
from routinelog.util.logger import get_logger

logger = get_logger(__name__)

IDENTITY_TOOLKIT_HOST = "identitytoolkit.googleapis.com"

# Provider error codes mapped to (client code, user-facing message)
ERROR_CODES: Dict[str, tuple] = {
    "INVALID_LOGIN_CREDENTIALS": ("auth/invalid-credential", "Username or password is incorrect"),
    "INVALID_PASSWORD": ("auth/wrong-password", "Wrong password"),
    "EMAIL_NOT_FOUND": ("auth/user-not-found", "No user found with this username"),
    "TOO_MANY_ATTEMPTS_TRY_LATER": ("auth/too-many-requests", "Too many attempts, please try again later"),
    "EMAIL_EXISTS": ("auth/email-already-in-use", "This username is already taken"),
    "WEAK_PASSWORD": ("auth/weak-password", "Password must be at least 6 characters"),
    "INVALID_EMAIL": ("auth/invalid-email", "Username contains invalid characters"),
    "USER_DISABLED": ("auth/user-disabled", "This account has been disabled"),
    "CREDENTIAL_TOO_OLD_LOGIN_AGAIN": ("auth/requires-recent-login", "Please sign in again to continue"),
    "TOKEN_EXPIRED": ("auth/requires-recent-login", "Please sign in again to continue"),
}
GENERIC_ERROR_MESSAGE = "Something went wrong, please try again"


def map_provider_error(provider_message: str) -> AuthError:
    """Turn an Identity Toolkit error message into an AuthError.

    Messages may carry detail after the code, e.g.
    ``WEAK_PASSWORD : Password should be at least 6 characters``.
    """
    provider_code = (provider_message or "").split(":")[0].strip()
    code, message = ERROR_CODES.get(provider_code, ("auth/internal-error", GENERIC_ERROR_MESSAGE))
    return AuthError(code, message, provider_message=provider_message)


class AuthApi:
    """Identity adapter keeping the currently signed-in session."""

    def __init__(self, api_key: Optional[str] = None, config: Optional[AppConfig] = None):
        self.emulator_host = get_optional_env_var("FIREBASE_AUTH_EMULATOR_HOST")
        if api_key:
            self.api_key = api_key
        elif self.emulator_host:
            # The emulator accepts any key
            self.api_key = get_optional_env_var("FIREBASE_API_KEY", "fake-api-key")
        else:
            self.api_key = get_required_env_var("FIREBASE_API_KEY", "Firebase Web API key")
        self.config = config if config is not None else load_app_config()
        self.domain = get_username_domain(self.config)
        self.current_session: Optional[AuthSession] = None

    @property
    def base_url(self) -> str:
        if self.emulator_host:
            return f"http://{self.emulator_host}/{IDENTITY_TOOLKIT_HOST}/v1"
        return f"https://{IDENTITY_TOOLKIT_HOST}/v1"

    def username_to_email(self, username: str) -> str:
        return f"{username.strip().lower()}@{self.domain}"

    @staticmethod
    def email_to_username(email: str) -> str:
        return email.split("@")[0]

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = requests.post(url, params={"key": self.api_key}, json=payload)
        except requests.RequestException as e:
            logger.error(f"Auth request {endpoint} failed: {e}")
            raise AuthError(
                "auth/network-request-failed", "Network error, check your connection", provider_message=str(e)
            ) from e

        if response.status_code >= 400:
            try:
                provider_message = response.json().get("error", {}).get("message", "")
            except ValueError:
                provider_message = response.text
            error = map_provider_error(provider_message)
            logger.warning(f"Auth request {endpoint} rejected: {provider_message}")
            raise error

        return response.json()

    def _session_from(self, data: Dict[str, Any]) -> AuthSession:
        return AuthSession(
            uid=data["localId"],
            email=data["email"],
            idToken=data["idToken"],
            refreshToken=data.get("refreshToken"),
        )

    def _sign_in(self, username: str, password: str) -> AuthSession:
        data = self._post("accounts:signInWithPassword", {
            "email": self.username_to_email(username),
            "password": password,
            "returnSecureToken": True,
        })
        return self._session_from(data)

    def login(self, username: str, password: str) -> AuthSession:
        """Sign in and make the session current."""
        self.current_session = self._sign_in(username, password)
        logger.info(f"Signed in user {self.current_session.uid}")
        return self.current_session

    def register(self, username: str, password: str) -> AuthSession:
        """Create the account and sign it in."""
        data = self._post("accounts:signUp", {
            "email": self.username_to_email(username),
            "password": password,
            "returnSecureToken": True,
        })
        self.current_session = self._session_from(data)
        logger.info(f"Registered user {self.current_session.uid}")
        return self.current_session

    def logout(self) -> None:
        if self.current_session is not None:
            logger.info(f"Signed out user {self.current_session.uid}")
        self.current_session = None

    def reauthenticate(self, username: str, password: str) -> AuthSession:
        """Confirm the current user's password and refresh the session tokens.

        Raises:
            AuthError: ``auth/no-current-user`` when signed out,
                ``auth/user-mismatch`` when the credentials belong to someone else
        """
        if self.current_session is None:
            raise AuthError("auth/no-current-user", "You must be signed in")
        session = self._sign_in(username, password)
        if session.uid != self.current_session.uid:
            raise AuthError("auth/user-mismatch", "These credentials belong to another account")
        self.current_session = session
        return session

    def delete_account(self, username: str, password: str) -> None:
        """Re-authenticate, then delete the current account and sign out."""
        session = self.reauthenticate(username, password)
        self._post("accounts:delete", {"idToken": session.idToken})
        logger.info(f"Deleted account {session.uid}")
        self.current_session = None
