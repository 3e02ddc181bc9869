from __future__ import annotations

import enum
import functools
import json
import logging
import uuid
from typing import TYPE_CHECKING, Self
from urllib.parse import urlencode, urljoin

import requests

from .config import DEFAULT_APP_ID, DEFAULT_TIMEOUT
from .exceptions import (
    FireflyAPIError,
    FireflyConstructionError,
    FireflyNoDeviceIdError,
    FireflyNotAuthenticatedError,
    FireflyParsingError,
)
from .logger import mask_secret
from .objects import SchoolClass, SessionCredentials, User
from .token import credentials_from_json, credentials_to_json, parse_api_version, parse_auth_token

if TYPE_CHECKING:  # pragma: no cover
    from requests import Response

    from .config import ClientConfig

__all__ = ["AuthState", "Firefly", "requires_authentication", "requires_device_id"]

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login/login.aspx"
VERIFY_TOKEN_PATH = "/Login/api/verifytoken"
API_VERSION_PATH = "/login/api/version"
GRAPHQL_PATH = "/_api/1.0/graphql"


class AuthState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AWAITING_TOKEN = "awaiting_token"
    AUTHENTICATED = "authenticated"


def requires_authentication(func):
    @functools.wraps(func)
    def inner(self, *args, **kwargs):
        self.ensure_authenticated()
        return func(self, *args, **kwargs)

    return inner


def requires_device_id(func):
    @functools.wraps(func)
    def inner(self, *args, **kwargs):
        self.ensure_device_id()
        return func(self, *args, **kwargs)

    return inner


class Firefly:
    """
    One device's session with a Firefly portal.

    The handshake is: pick a device id, send the user to `auth_url` in a browser, and feed
    the XML token the portal hands back to `complete_authentication`. From then on the
    secret authorises every request. `export_credentials` / `import_credentials` let a
    later run skip the browser step.

    Example:
    -------
    >>> firefly = Firefly("https://school.fireflycloud.net")
    >>> firefly.set_device_id()
    >>> print(firefly.auth_url)
    >>> firefly.complete_authentication(xml_from_browser)
    >>> firefly.verify_credentials()
    True

    """

    def __init__(
        self,
        host: str | None = None,
        app_id: str = DEFAULT_APP_ID,
        device_id: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        host = (host or "").strip().rstrip("/")
        if not host:
            raise FireflyConstructionError("A Firefly host is required, e.g. https://school.fireflycloud.net")

        self.host = host
        self.app_id = app_id or DEFAULT_APP_ID
        self.timeout = timeout
        self._credentials = SessionCredentials(device_id=device_id or None)
        self._state = AuthState.UNAUTHENTICATED

    @classmethod
    def from_config(cls, config: ClientConfig) -> Self:
        config.validate()
        return cls(host=config.host, app_id=config.app_id, device_id=config.device_id, timeout=config.timeout)

    def __repr__(self) -> str:
        user = self._credentials.user.username if self._credentials.user else None
        return f"{self.__class__.__name__}(host={self.host!r}, user={user!r}, state={self._state.value})"

    # State

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is AuthState.AUTHENTICATED

    @property
    def device_id(self) -> str | None:
        return self._credentials.device_id

    @property
    def secret(self) -> str | None:
        return self._credentials.secret

    @property
    def user(self) -> User | None:
        return self._credentials.user

    @property
    def credentials(self) -> SessionCredentials:
        return self._credentials.copy()

    def ensure_authenticated(self) -> None:
        if not self.is_authenticated:
            raise FireflyNotAuthenticatedError()

    def ensure_device_id(self) -> None:
        if not self.device_id:
            raise FireflyNoDeviceIdError()

    def _install(self, credentials: SessionCredentials) -> None:
        self._credentials = credentials
        self._state = AuthState.AUTHENTICATED if credentials.authenticated else AuthState.UNAUTHENTICATED

    # Handshake

    def set_device_id(self, device_id: str | None = None) -> str:
        """Store `device_id`, or a freshly generated one when omitted, and return it."""
        self._credentials.device_id = device_id or str(uuid.uuid4())
        logger.debug(f"Device id set to {self._credentials.device_id}")
        return self._credentials.device_id

    @property
    def auth_url(self) -> str:
        """The login page the user must open in a browser to obtain a token for this device."""
        self.ensure_device_id()

        query = urlencode({"ips_client": self.app_id, "device_id": self.device_id})
        if self._state is AuthState.UNAUTHENTICATED:
            self._state = AuthState.AWAITING_TOKEN
        return f"{self.host}{LOGIN_PATH}?{query}"

    def authenticate(self) -> str:
        url = self.auth_url
        logger.info(f"Open {url} in a browser and pass the resulting token to complete_authentication()")
        return url

    def complete_authentication(self, xml_token: str | bytes) -> None:
        """
        Install the secret, user and classes from the login page's XML token.

        Raises:
            FireflyParsingError: The token is unusable. The session is left as it was.
        """
        parsed = parse_auth_token(xml_token)
        parsed.device_id = self.device_id
        self._install(parsed)
        logger.info(f"Authenticated as {parsed.user.username!r} (secret {mask_secret(parsed.secret)})")

    def import_credentials(self, json_text: str | bytes) -> bool:
        """Restore everything `export_credentials` produced. Malformed input changes nothing."""
        imported = credentials_from_json(json_text)
        self._install(imported)
        logger.debug(f"Imported credentials, session is now {self._state.value}")
        return True

    def export_credentials(self) -> str:
        return credentials_to_json(self._credentials)

    def logout(self) -> None:
        """Forget secret, user and classes. The device id is kept."""
        self._install(SessionCredentials(device_id=self.device_id))

    @property
    @requires_authentication
    def classes(self) -> list[SchoolClass]:
        return list(self._credentials.classes)

    @requires_authentication
    @requires_device_id
    def verify_credentials(self) -> bool:
        """
        Ask the portal whether the stored secret is still accepted.

        A False answer does not log the session out, that is up to the caller.
        """
        result = self.json(VERIFY_TOKEN_PATH)
        valid = bool(result.get("valid")) if isinstance(result, dict) else False
        logger.debug(f"Credentials valid: {valid}")
        return valid

    @property
    def api_version(self) -> str:
        response = self.get(API_VERSION_PATH, authenticated=False)
        return parse_api_version(response.content)

    # Transport

    def create_url(self, path: str) -> str:
        """Create a full URL from a path."""
        return urljoin(self.host + "/", path.lstrip("/"))

    def _auth_params(self) -> dict[str, str]:
        return {"ffauth_device_id": self.device_id or "", "ffauth_secret": self.secret or ""}

    def request(self, method: str, path: str, *, authenticated: bool = True, **kwargs) -> Response:
        """
        Send a single request. Non-2xx replies raise `requests.HTTPError`.

        When `authenticated`, the device id and secret are added as query parameters.
        """
        url = self.create_url(path)
        if authenticated:
            kwargs["params"] = {**(kwargs.get("params") or {}), **self._auth_params()}
        kwargs.setdefault("timeout", self.timeout)

        logger.debug(f"{method.upper()} {url}")
        try:
            response = requests.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            status = e.response.status_code if e.response is not None else type(e).__name__
            logger.warning(f"{method.upper()} {path} failed: {status}")
            raise
        return response

    def get(self, path: str, *args, **kwargs) -> Response:
        return self.request("get", path, *args, **kwargs)

    def post(self, path: str, *args, **kwargs) -> Response:
        return self.request("post", path, *args, **kwargs)

    def json(self, path: str, *args, method: str = "get", **kwargs) -> dict | list:
        """
        Performs a GET or POST request and parses the JSON response.
        Handles potential double JSON encoding.
        """
        r = self.request(method, path, *args, **kwargs)

        json_ = r.text
        try:
            while isinstance(json_, str):
                if not json_:
                    logger.warning(f"Empty response text received for {method.upper()} {path}")
                    return {}
                json_ = json.loads(json_)
            return json_
        except json.JSONDecodeError as e:
            logger.error(f"JSONDecodeError for {method.upper()} {path} (status {r.status_code}): {r.text[:500]}")
            raise FireflyParsingError(f"Failed to decode JSON from {method.upper()} {path}: {e.msg}") from e

    def graphql(self, query: str) -> dict:
        """Run a query against the portal's GraphQL endpoint and return its `data` member."""
        result = self.json(GRAPHQL_PATH, method="post", data={"data": query})
        if not isinstance(result, dict):
            raise FireflyParsingError("GraphQL reply is not an object")
        if result.get("errors"):
            messages = "; ".join(
                str(error.get("message", error) if isinstance(error, dict) else error) for error in result["errors"]
            )
            logger.error(f"GraphQL query failed: {messages}")
            raise FireflyAPIError(messages)
        return result.get("data") or {}
