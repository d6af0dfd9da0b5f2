# taskhub/client/api.py
"""
HTTP client used by the screens in `taskhub.client.views`.

The bearer token is persisted by a `TokenStore` so a login survives restarts
until `logout()` clears it, and it is attached to every request. The
transport is a `requests.Session` by default; anything exposing
``request(method, url, json=..., params=..., headers=..., timeout=...)`` works, which is
how the tests drive the app through FastAPI's TestClient.
"""

import json
import logging
import os
from typing import Any, Optional

import requests

from taskhub.config.settings import Settings
from taskhub.schemas.user import UserOut
from taskhub.utils.normalize import normalize_user

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A non-2xx response, or a transport failure (status_code 0)"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403


class TokenStore:
    """Keeps the auth token in a small JSON file"""

    def __init__(self, path: Optional[str] = None):
        self.path = path or Settings.TOKEN_FILE

    def load(self) -> Optional[str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                return json.load(fh).get("token")
        except FileNotFoundError:
            return None
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return None

    def save(self, token: str) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump({"token": token}, fh)

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Request failed"
    detail = body.get("detail", body.get("message")) if isinstance(body, dict) else body
    if isinstance(detail, dict):
        return str(detail.get("message", detail))
    if isinstance(detail, list) and detail:
        # FastAPI schema errors: [{"loc": [...], "msg": "..."}]
        first = detail[0]
        if isinstance(first, dict):
            return str(first.get("msg", first))
    return str(detail) if detail else "Request failed"


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Any = None,
        token_store: Optional[TokenStore] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (Settings.API_BASE_URL if base_url is None else base_url).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.token_store = token_store
        self.timeout = Settings.REQUEST_TIMEOUT if timeout is None else timeout
        self.token: Optional[str] = token_store.load() if token_store else None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        kwargs = {"headers": headers, "timeout": self.timeout}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = params

        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise ApiError(0, str(e)) from e

        if response.status_code >= 400:
            raise ApiError(response.status_code, _error_message(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def _store_session(self, data: Any) -> UserOut:
        data = data or {}
        token = data.get("token") or data.get("access_token")
        if not token:
            raise ApiError(0, "Authentication response did not include a token")
        self.token = token
        if self.token_store:
            self.token_store.save(token)
        return normalize_user(data)

    def login(self, email: str, password: str) -> UserOut:
        return self._store_session(self.post("/auth/login", {"email": email, "password": password}))

    def register(self, name: str, email: str, password: str) -> UserOut:
        return self._store_session(
            self.post("/auth/register", {"name": name, "email": email, "password": password})
        )

    def profile(self) -> UserOut:
        return normalize_user(self.get("/auth/profile"))

    def logout(self) -> None:
        self.token = None
        if self.token_store:
            self.token_store.clear()
