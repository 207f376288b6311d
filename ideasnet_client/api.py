import logging
from typing import Any, Callable, List, Optional

import httpx

from .session import Session

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """The server could not be reached."""


class ApiError(Exception):
    """The server answered with an error status."""

    def __init__(self, status_code: int, error: str, message: Optional[str] = None,
                 fields: Optional[List[str]] = None, body: Any = None):
        super().__init__(message or error)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.fields = fields or []
        self.body = body

    @property
    def text(self) -> str:
        """What a toast would show."""
        return self.message or self.error

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error") or body.get("detail") or response.reason_phrase
            if isinstance(error, dict):
                error = error.get("message") or str(error)
            return cls(response.status_code, str(error), body.get("message"), body.get("fields"), body)
        return cls(response.status_code, response.reason_phrase or "Request failed", body=body)


class ApiClient:
    """
    HTTP client for the Ideas.net API.

    A request hook attaches the session's bearer token. A response hook clears
    the session on any 401 and calls `on_unauthorized`, which is where a UI
    would send the user back to the login view.
    """

    def __init__(
        self,
        base_url: str = "",
        session: Optional[Session] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.session = session or Session()
        self.on_unauthorized = on_unauthorized
        self.http = httpx.Client(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            transport=transport,
            timeout=timeout,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._handle_unauthorized],
            },
        )

    def _attach_token(self, request: httpx.Request) -> None:
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    def _handle_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            logger.info("401 from %s, clearing session", response.request.url.path)
            self.session.logout()
            if self.on_unauthorized:
                self.on_unauthorized()

    def request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            raise NetworkError(str(exc)) from exc
        if response.is_error:
            raise ApiError.from_response(response)
        if not response.content:
            return None
        return response.json()

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("DELETE", path, json=json, **kwargs)

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
