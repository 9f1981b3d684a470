"""
Application tools: list applications, assign users and groups, delete and
deactivate applications.
"""
import logging
from typing import Any, Dict, List

from mcp.types import TextContent

from client import OktaClient
from tools.common import collect_sanitized, entity_response, handle_error, json_response, text_response
from tools.schemas import (
    AppIdInput,
    AssignGroupToApplicationInput,
    AssignUserToApplicationInput,
    ListApplicationsInput,
)

logger = logging.getLogger("okta_mcp")


async def list_applications(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    params = ListApplicationsInput.model_validate(args)
    try:
        query_params: Dict[str, Any] = {}
        if params.limit:
            query_params["limit"] = params.limit
        if params.query:
            query_params["q"] = params.query

        logger.info(f"[TOOL] list applications {query_params}")
        data = await collect_sanitized(client.list_applications(query_params))
        return json_response(data)
    except Exception as e:
        handle_error(e, "list applications")


async def assign_user_to_application(client: OktaClient, args: Dict[str, Any], sanitize_single: bool = False) -> List[TextContent]:
    params = AssignUserToApplicationInput.model_validate(args)
    try:
        app_user: Dict[str, Any] = {"id": params.userId}
        if params.profile is not None:
            app_user["profile"] = params.profile

        logger.info(f"[TOOL] assign user {params.userId} to app {params.appId}")
        assignment = await client.assign_user_to_application(params.appId, app_user)
        return entity_response(assignment, sanitize_single)
    except Exception as e:
        handle_error(e, "assign user to application")


async def assign_group_to_application(client: OktaClient, args: Dict[str, Any], sanitize_single: bool = False) -> List[TextContent]:
    params = AssignGroupToApplicationInput.model_validate(args)
    try:
        logger.info(f"[TOOL] assign group {params.groupId} to app {params.appId}")
        assignment = await client.assign_group_to_application(params.appId, params.groupId, {})
        return entity_response(assignment, sanitize_single)
    except Exception as e:
        handle_error(e, "assign group to application")


async def delete_application(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    params = AppIdInput.model_validate(args)
    try:
        await client.delete_application(params.appId)
        logger.info(f"[TOOL] deleted app {params.appId}")
        return text_response(f"Application {params.appId} has been deleted")
    except Exception as e:
        handle_error(e, "delete application")


async def deactivate_application(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    params = AppIdInput.model_validate(args)
    try:
        await client.deactivate_application(params.appId)
        logger.info(f"[TOOL] deactivated app {params.appId}")
        return text_response(f"Application {params.appId} has been deactivated")
    except Exception as e:
        handle_error(e, "deactivate application")
