"""
Group tools: list and create groups, add users to groups.
"""
import logging
from typing import Any, Dict, List

from mcp.types import TextContent

from client import OktaClient
from tools.common import collect_sanitized, entity_response, handle_error, json_response, text_response
from tools.schemas import AssignUserToGroupInput, CreateGroupInput, ListGroupsInput

logger = logging.getLogger("okta_mcp")


async def list_groups(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    params = ListGroupsInput.model_validate(args)
    try:
        query_params: Dict[str, Any] = {}
        if params.limit:
            query_params["limit"] = params.limit
        if params.search:
            query_params["search"] = params.search

        logger.info(f"[TOOL] list groups {query_params}")
        data = await collect_sanitized(client.list_groups(query_params))
        return json_response(data)
    except Exception as e:
        handle_error(e, "list groups")


async def create_group(client: OktaClient, args: Dict[str, Any], sanitize_single: bool = False) -> List[TextContent]:
    params = CreateGroupInput.model_validate(args)
    try:
        profile = params.profile.model_dump(exclude_none=True)
        logger.info(f"[TOOL] create group {profile['name']!r}")
        group = await client.create_group({"profile": profile})
        return entity_response(group, sanitize_single)
    except Exception as e:
        handle_error(e, "create group")


async def assign_user_to_group(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    params = AssignUserToGroupInput.model_validate(args)
    try:
        await client.assign_user_to_group(params.groupId, params.userId)
        return text_response(f"User {params.userId} has been assigned to group {params.groupId}")
    except Exception as e:
        handle_error(e, "assign user to group")
