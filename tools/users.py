"""
User tools: list, create, get, update and delete Okta users.
"""
import logging
from typing import Any, Dict, List

from mcp.types import TextContent

from client import OktaClient
from tools.common import collect_sanitized, entity_response, handle_error, json_response, text_response
from tools.schemas import CreateUserInput, ListUsersInput, UpdateUserInput, UserIdInput

logger = logging.getLogger("okta_mcp")


async def list_users(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    params = ListUsersInput.model_validate(args)
    try:
        query_params: Dict[str, Any] = {}
        if params.limit:
            query_params["limit"] = params.limit
        if params.query:
            query_params["q"] = params.query

        logger.info(f"[TOOL] list users {query_params}")
        data = await collect_sanitized(client.list_users(query_params))
        return json_response(data)
    except Exception as e:
        handle_error(e, "list users")


async def create_user(client: OktaClient, args: Dict[str, Any], sanitize_single: bool = False) -> List[TextContent]:
    params = CreateUserInput.model_validate(args)
    try:
        body: Dict[str, Any] = {"profile": params.profile.model_dump()}
        if params.credentials is not None:
            body["credentials"] = params.credentials.model_dump(exclude_none=True)

        logger.info(f"[TOOL] create user {params.profile.login}")
        user = await client.create_user(body)
        return entity_response(user, sanitize_single)
    except Exception as e:
        handle_error(e, "create user")


async def get_user(client: OktaClient, args: Dict[str, Any], sanitize_single: bool = False) -> List[TextContent]:
    params = UserIdInput.model_validate(args)
    try:
        user = await client.get_user(params.userId)
        return entity_response(user, sanitize_single)
    except Exception as e:
        handle_error(e, "get user")


async def update_user(client: OktaClient, args: Dict[str, Any], sanitize_single: bool = False) -> List[TextContent]:
    params = UpdateUserInput.model_validate(args)
    try:
        profile = params.profile.model_dump(exclude_none=True)
        logger.info(f"[TOOL] update user {params.userId}: {sorted(profile)}")
        user = await client.update_user(params.userId, {"profile": profile})
        return entity_response(user, sanitize_single)
    except Exception as e:
        handle_error(e, "update user")


async def delete_user(client: OktaClient, args: Dict[str, Any]) -> List[TextContent]:
    """
    Deactivate then delete a user.

    Okta only deletes deactivated users, so the two calls run in order and
    the delete is never sent if deactivation fails. There is no rollback:
    if the delete fails afterwards the user stays deactivated.
    """
    params = UserIdInput.model_validate(args)
    user_id = params.userId
    try:
        await client.deactivate_user(user_id)
        logger.info(f"[TOOL] deactivated user {user_id}")
        try:
            await client.delete_user(user_id)
        except Exception:
            logger.warning(f"[TOOL] user {user_id} was deactivated but could not be deleted")
            raise
        return text_response(f"User {user_id} has been deactivated and deleted")
    except Exception as e:
        handle_error(e, "delete user")
