"""
Okta API Client for the management API (/api/v1).
"""
import os
import sys
import logging
from typing import Any, AsyncIterator, Dict, Optional
from urllib.parse import quote

import httpx

from config import OktaSettings

logger = logging.getLogger("okta_mcp")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stderr handler to the okta_mcp logger; stdout belongs to the MCP transport."""
    level_name = (level or os.environ.get("OKTA_LOG_LEVEL") or "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        logger.addHandler(handler)
    return logger


class OktaApiError(Exception):
    """Okta answered with a non-2xx status."""

    def __init__(self, status_code: int, error_code: Optional[str], summary: str, response: Any = None):
        self.status_code = status_code
        self.error_code = error_code
        self.summary = summary
        self.response = response
        parts = [f"Okta HTTP {status_code}"]
        if error_code:
            parts.append(error_code)
        parts.append(summary)
        super().__init__(" ".join(parts))

    @classmethod
    def from_response(cls, response: httpx.Response) -> "OktaApiError":
        body = _parse_json_safe(response)
        error_code = None
        summary = response.text or response.reason_phrase
        if isinstance(body, dict) and "errorSummary" in body:
            error_code = body.get("errorCode")
            summary = body["errorSummary"]
            causes = [c.get("errorSummary") for c in body.get("errorCauses") or [] if isinstance(c, dict)]
            causes = [c for c in causes if c]
            if causes:
                summary = f"{summary}: {'; '.join(causes)}"
        return cls(response.status_code, error_code, summary, body)


class OktaClient:
    def __init__(self, settings: OktaSettings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.domain = settings.domain
        self.timeout = settings.http_timeout
        self._transport = transport
        self.headers = {
            "Authorization": f"SSWS {settings.token}",
            "Accept": "application/json",
            "Content-Type": "application/json"
        }

    def build_url(self, url: str) -> str:
        if url.startswith("https://") or url.startswith("http://"):
            return url
        return f"https://{self.domain}{url}" if url.startswith("/") else f"https://{self.domain}/{url}"

    async def send(self, method: str, url: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """Send one request and return the raw response. Raises OktaApiError on HTTP >= 400."""
        url = self.build_url(url)
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            logger.debug(f"[DEBUG] {method} {url} params={params}")
            response = await client.request(
                method=method,
                url=url,
                headers=self.headers,
                json=body,
                params=params
            )

        if response.status_code >= 400:
            error = OktaApiError.from_response(response)
            logger.error(f"[ERROR] {method} {url}: {error}")
            raise error
        return response

    async def execute_request(self, method: str, url: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send a request and return the decoded JSON body (None for empty bodies)."""
        response = await self.send(method, url, body=body, params=params)
        if not response.content:
            return None
        return _parse_json_safe(response)

    async def paginate(self, url: str, params: Optional[Dict[str, Any]] = None) -> AsyncIterator[Any]:
        """
        Yield records from a list endpoint one at a time.

        The next page is only requested once the caller has consumed the
        current one. Pages are chained through the Link header (rel="next");
        the next URL already carries the cursor and query, so params are
        only sent with the first request.
        """
        next_url: Optional[str] = url
        next_params = params
        while next_url:
            response = await self.send("GET", next_url, params=next_params)
            page = _parse_json_safe(response) if response.content else []
            if isinstance(page, list):
                for record in page:
                    yield record
            elif page is not None:
                yield page
            next_url = response.links.get("next", {}).get("url")
            next_params = None

    # -- USERS --

    def list_users(self, params: Optional[Dict[str, Any]] = None) -> AsyncIterator[Any]:
        return self.paginate("/api/v1/users", params)

    async def get_current_user(self) -> Any:
        return await self.execute_request("GET", "/api/v1/users/me")

    async def create_user(self, body: Dict[str, Any]) -> Any:
        return await self.execute_request("POST", "/api/v1/users", body=body)

    async def get_user(self, user_id: str) -> Any:
        return await self.execute_request("GET", f"/api/v1/users/{_segment(user_id)}")

    async def update_user(self, user_id: str, body: Dict[str, Any]) -> Any:
        # POST is Okta's partial update; PUT would replace the whole profile
        return await self.execute_request("POST", f"/api/v1/users/{_segment(user_id)}", body=body)

    async def deactivate_user(self, user_id: str) -> Any:
        return await self.execute_request("POST", f"/api/v1/users/{_segment(user_id)}/lifecycle/deactivate")

    async def delete_user(self, user_id: str) -> Any:
        return await self.execute_request("DELETE", f"/api/v1/users/{_segment(user_id)}")

    # -- GROUPS --

    def list_groups(self, params: Optional[Dict[str, Any]] = None) -> AsyncIterator[Any]:
        return self.paginate("/api/v1/groups", params)

    async def create_group(self, body: Dict[str, Any]) -> Any:
        return await self.execute_request("POST", "/api/v1/groups", body=body)

    async def assign_user_to_group(self, group_id: str, user_id: str) -> Any:
        return await self.execute_request("PUT", f"/api/v1/groups/{_segment(group_id)}/users/{_segment(user_id)}")

    # -- APPLICATIONS --

    def list_applications(self, params: Optional[Dict[str, Any]] = None) -> AsyncIterator[Any]:
        return self.paginate("/api/v1/apps", params)

    async def assign_user_to_application(self, app_id: str, body: Dict[str, Any]) -> Any:
        return await self.execute_request("POST", f"/api/v1/apps/{_segment(app_id)}/users", body=body)

    async def assign_group_to_application(self, app_id: str, group_id: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return await self.execute_request(
            "PUT",
            f"/api/v1/apps/{_segment(app_id)}/groups/{_segment(group_id)}",
            body=body if body is not None else {}
        )

    async def delete_application(self, app_id: str) -> Any:
        return await self.execute_request("DELETE", f"/api/v1/apps/{_segment(app_id)}")

    async def deactivate_application(self, app_id: str) -> Any:
        return await self.execute_request("POST", f"/api/v1/apps/{_segment(app_id)}/lifecycle/deactivate")


def _segment(value: str) -> str:
    # user ids may be logins like jane@example.com
    return quote(str(value), safe="")


def _parse_json_safe(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}
