"""
Connection test tool.
"""
import logging
from typing import Any, Dict, List

from mcp.types import TextContent

from client import OktaClient
from tools.common import handle_error, json_response

logger = logging.getLogger("okta_mcp")


async def okta_test(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    """Verify the token works by fetching the user it belongs to (/api/v1/users/me)."""
    try:
        user_info = await client.get_current_user() or {}
        if not isinstance(user_info, dict):
            raise ValueError(f"unexpected /api/v1/users/me response: {type(user_info).__name__}")
        profile = user_info.get("profile") or {}
        logger.info(f"Okta tenant reachable: {client.domain}")
        return json_response({
            "success": True,
            "message": "Okta tenant connected successfully!",
            "details": {
                "domain": client.domain,
                "user": profile.get("email") or profile.get("login") or "authenticated",
                "status": user_info.get("status", "ACTIVE"),
            }
        })
    except Exception as e:
        handle_error(e, "connect to Okta tenant")
