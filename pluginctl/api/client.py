"""
Plugin Server API Client.

This module provides a synchronous client for the plugin endpoints of the
server's REST API (v4).

Key features:
- Token or username/password authentication
- Forced bundle upload
- Enable/disable by plugin id
- Plugin status listing
- Server error messages surfaced through RemoteError
"""

from typing import IO, Any

import httpx

from pluginctl.errors import RemoteError

API_PREFIX = "/api/v4"


class PluginClient:
    """
    Client for the server's plugin management API.

    Example:
        with PluginClient("http://localhost:8065") as client:
            client.set_token(token)
            client.enable_plugin("com.example.demo")
    """

    def __init__(
        self,
        site_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize PluginClient.

        Args:
            site_url: Base URL of the server (e.g., "http://localhost:8065")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.site_url = site_url.rstrip("/")
        self.token: str | None = None
        self._client = httpx.Client(
            base_url=self.site_url + API_PREFIX,
            timeout=timeout,
            transport=transport,
            headers={"X-Requested-With": "XMLHttpRequest"},
        )

    def set_token(self, token: str) -> None:
        """Authenticate subsequent requests with a bearer token."""
        self.token = token
        self._client.headers["Authorization"] = f"Bearer {token}"

    def login(self, username: str, password: str) -> None:
        """
        Log in with username and password and keep the session token.

        Raises:
            RemoteError: If the login is rejected
        """
        response = self._request(
            "POST",
            "/users/login",
            json={"login_id": username, "password": password},
            action=f"login as {username}",
        )
        token = response.headers.get("Token")
        if not token:
            raise RemoteError(
                f"failed to login as {username}: no session token returned",
                status_code=response.status_code,
            )
        self.set_token(token)

    def upload_plugin_forced(self, bundle: IO[bytes], filename: str = "plugin.tar.gz") -> dict[str, Any]:
        """
        Upload a plugin bundle, replacing any plugin with the same id.

        Args:
            bundle: Open binary file object of the bundle
            filename: File name reported to the server

        Returns:
            Manifest of the uploaded plugin as returned by the server

        Raises:
            RemoteError: If the upload fails
        """
        response = self._request(
            "POST",
            "/plugins",
            files={"plugin": (filename, bundle, "application/gzip")},
            data={"force": "true"},
            action="upload plugin bundle",
        )
        return _json_or_empty(response)

    def enable_plugin(self, plugin_id: str) -> None:
        """Enable a plugin. Raises RemoteError on failure."""
        self._request("POST", f"/plugins/{plugin_id}/enable", action="enable plugin")

    def disable_plugin(self, plugin_id: str) -> None:
        """Disable a plugin. Raises RemoteError on failure."""
        self._request("POST", f"/plugins/{plugin_id}/disable", action="disable plugin")

    def get_plugin_statuses(self) -> list[dict[str, Any]]:
        """
        List the status of every plugin known to the server.

        Returns:
            List of status objects (plugin_id, version, state, ...)

        Raises:
            RemoteError: If the request fails
        """
        response = self._request("GET", "/plugins/statuses", action="get plugin statuses")
        statuses = _json_or_empty(response)
        return statuses if isinstance(statuses, list) else []

    def _request(self, method: str, path: str, action: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(f"failed to {action}: {e}") from e

        if response.is_error:
            raise RemoteError(
                f"failed to {action}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _json_or_empty(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


def _error_message(response: httpx.Response) -> str:
    """Extract the server's error message, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return f"{body['message']} (status {response.status_code})"

    return f"{response.status_code} {response.reason_phrase}".strip()
