from __future__ import annotations

import json
import time
from typing import Any, Callable, Optional

import requests
from jose import JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_LIFETIME_SECONDS
from ..core.exceptions import UpstreamError
from ..core.logging import get_logger

log = get_logger("hris")


class HrisClient:
    """Client for the upstream HRIS "general queries" API.

    Holds one bearer token per instance. ``read_data`` logs in lazily when the
    token is missing or past its expiry and, on a 401, drops the token and
    retries exactly once. Anything else goes straight back to the caller.
    """

    def __init__(
        self,
        *,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._timeout = float(timeout)
        self._session = session or requests.Session()
        self._clock = clock

        self._token: Optional[str] = None
        self._expires_at: Optional[float] = None

    @property
    def login_url(self) -> str:
        return f"{self._base_url}/auth/login"

    @property
    def read_data_url(self) -> str:
        return f"{self._base_url}/general-queries/readData"

    @property
    def token_expires_at(self) -> Optional[float]:
        return self._expires_at

    def _token_expiry(self, token: str) -> float:
        try:
            exp = jwt.get_unverified_claims(token).get("exp")
        except JWTError as e:
            log.warning("Could not decode HRIS token expiry: %s", e)
            exp = None
        if exp is None:
            return self._clock() + DEFAULT_TOKEN_LIFETIME_SECONDS
        return float(exp)

    def login(self) -> str:
        log.info("Logging into HRIS API as %s", self._username)
        try:
            resp = self._session.post(
                self.login_url,
                json={"username": self._username, "password": self._password},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            body = resp.json() or {}
        except (requests.RequestException, ValueError) as e:
            raise UpstreamError(f"HRIS API login failed: {e}") from e

        token = body.get("token") or (body.get("data") or {}).get("token")
        if not token:
            raise UpstreamError("HRIS API login failed: no token in response")

        self._token = token
        self._expires_at = self._token_expiry(token)
        log.info("HRIS API login successful; token expires at %s", self._expires_at)
        return token

    def clear_token(self) -> None:
        self._token = None
        self._expires_at = None

    def has_valid_token(self) -> bool:
        if not self._token:
            return False
        return self._expires_at is None or self._clock() < self._expires_at

    def get_token(self) -> str:
        if not self.has_valid_token():
            log.info("HRIS token missing or expired, logging in again")
            return self.login()
        return self._token

    def _post_read_data(self, payload: dict) -> requests.Response:
        token = self.get_token()
        try:
            return self._session.post(
                self.read_data_url,
                json=payload,
                headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"HRIS readData {payload['collection']} failed: {e}") from e

    def read_data(
        self,
        collection: str,
        filter_array: Optional[dict] = None,
        project: str = "",
        paginate: bool = False,
    ) -> list[Any]:
        payload = {
            "collection": collection,
            "filter_array": json.dumps(filter_array or {}),
            "project": project,
            "paginate": paginate,
        }
        log.debug("HRIS readData %s filter=%s", collection, payload["filter_array"])

        resp = self._post_read_data(payload)
        if resp.status_code == 401:
            log.info("HRIS answered 401 for %s, forcing re-login", collection)
            self.clear_token()
            resp = self._post_read_data(payload)

        try:
            resp.raise_for_status()
            body = resp.json() or {}
        except (requests.RequestException, ValueError) as e:
            raise UpstreamError(f"HRIS readData {collection} failed: {e}") from e

        data = body.get("data")
        if not data:
            log.warning("No data received from HRIS API for collection %s", collection)
            return []
        return list(data)
