import logging
from typing import Any, Optional

import requests

from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, http_status: int, status_code: str, message: str):
        self.http_status = http_status
        self.status_code = status_code
        self.message = message
        super().__init__(f"{http_status} [{status_code}] {message}")

    @property
    def is_conflict(self) -> bool:
        """Lost an optimistic race; refetch and decide again."""
        return self.status_code == AppStatusCode.VERIFICATION_CONCURRENT_MODIFICATION

    @property
    def is_invalid_transition(self) -> bool:
        return self.status_code == AppStatusCode.VERIFICATION_INVALID_TRANSITION


class SessionExpired(ApiError):
    """Raised on any 401. The cached token is already gone when this is seen."""


class AdminApiClient:
    """Operator-side client for the console services.

    Holds the bearer token for the lifetime of the client. Nothing is retried:
    on 409 the caller refetches verification details and decides again, on
    401 it has to log in again.
    """

    def __init__(self, auth_base_url: str, partner_base_url: str,
                 token: Optional[str] = None, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.auth_base_url = auth_base_url.rstrip("/")
        self.partner_base_url = partner_base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.http = session or requests.Session()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def _request(self, method: str, url: str, **kwargs) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.http.request(
            method, url, headers=headers, timeout=self.timeout, **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if response.status_code == 401:
            # drop the credential before anyone can retry with it
            self.token = None
            logger.info("Console session expired, cached token cleared")
            raise SessionExpired(401, str(body.get("status_code", "")),
                                 body.get("message") or "Not authenticated")

        if response.status_code >= 400:
            raise ApiError(response.status_code, str(body.get("status_code", "")),
                           body.get("message") or response.reason or "Request failed")

        return body.get("data")

    # -------- auth --------

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", f"{self.auth_base_url}/api/admin/auth/login",
                             json={"email": email, "password": password})
        self.token = data["access_token"]
        return data["admin"]

    def me(self) -> dict:
        return self._request("GET", f"{self.auth_base_url}/api/admin/auth/me")

    def logout(self) -> None:
        try:
            self._request("POST", f"{self.auth_base_url}/api/admin/auth/logout")
        finally:
            self.token = None

    # -------- partner verification --------

    def _partner_url(self, partner_id: Optional[int] = None, action: str = "") -> str:
        url = f"{self.partner_base_url}/api/admin/partners"
        if partner_id is not None:
            url = f"{url}/{partner_id}"
        return f"{url}/{action}" if action else url

    def list_partners(self, verification_status: Optional[str] = None, **params) -> dict:
        if verification_status and verification_status != "all":
            params["verification_status"] = verification_status
        return self._request("GET", self._partner_url(), params=params)

    def pending_verification(self) -> list:
        return self._request("GET", self._partner_url(action="pending-verification"))

    def verification_details(self, partner_id: int) -> dict:
        return self._request("GET", self._partner_url(partner_id, "verification-details"))

    def approve(self, partner_id: int, notes: Optional[str] = None) -> dict:
        return self._request("POST", self._partner_url(partner_id, "approve"),
                             json={"approval_notes": notes})

    def reject(self, partner_id: int, reason: str) -> dict:
        return self._request("POST", self._partner_url(partner_id, "reject"),
                             json={"rejection_reason": reason})

    def request_clarification(self, partner_id: int, message: str) -> dict:
        return self._request("POST", self._partner_url(partner_id, "request-clarification"),
                             json={"message": message})

    def suspend(self, partner_id: int, reason: str) -> dict:
        return self._request("POST", self._partner_url(partner_id, "suspend"),
                             json={"reason": reason})

    def reinstate(self, partner_id: int, notes: Optional[str] = None) -> dict:
        return self._request("POST", self._partner_url(partner_id, "reinstate"),
                             json={"notes": notes})
