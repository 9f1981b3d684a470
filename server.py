"""
Okta MCP Server - Model Context Protocol server for Okta user, group and
application management.

This is the main entry point for the MCP server.
"""
import functools
import sys
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import Field

# Ensure the project root is in sys.path for imports
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from client import OktaClient, configure_logging
from config import ConfigurationError, OktaSettings
from tools import applications, basic, groups, users
from tools.common import OktaToolError, error_result
from tools.schemas import GroupProfile, UserCredentials, UserProfile, UserProfileUpdate

SERVER_NAME = "okta-mcp-server"

Limit = Annotated[Optional[int], Field(description="Number of results to return (default 20)")]


def reports_failures(func):
    """
    Return a tool failure to the caller as an error result carrying exactly
    'Failed to <operation>: <reason>'. FastMCP would otherwise prefix the
    message with 'Error executing tool <name>: '.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except OktaToolError as e:
            return error_result(e)
    return wrapper


def build_server(client: OktaClient, settings: Optional[OktaSettings] = None) -> FastMCP:
    """Create the FastMCP server with every tool bound to ``client``."""
    mcp = FastMCP(SERVER_NAME)
    sanitize_single = bool(settings and settings.sanitize_single_responses)

    def tool(func):
        # text content only; no structured output alongside it
        return mcp.tool(structured_output=False)(reports_failures(func))

    # ===========================================
    # BASIC TOOLS
    # ===========================================

    @tool
    async def okta_test() -> List[TextContent]:
        """Test connection to the Okta tenant by calling /api/v1/users/me with the configured token."""
        return await basic.okta_test(client, {})

    # ===========================================
    # USER TOOLS
    # ===========================================

    @tool
    async def okta_list_users_make_request(
        limit: Limit = None,
        query: Annotated[Optional[str], Field(description="search a user by firstName, lastName, or email.")] = None,
    ) -> List[TextContent]:
        """List Okta users. Nested objects are stripped from each user; only primitive fields are returned."""
        return await users.list_users(client, {"limit": limit, "query": query})

    @tool
    async def okta_create_user_make_request(
        profile: UserProfile,
        credentials: Optional[UserCredentials] = None,
    ) -> List[TextContent]:
        """Create an Okta user. profile needs firstName, lastName, email and login (email format)."""
        return await users.create_user(client, {"profile": profile, "credentials": credentials}, sanitize_single)

    @tool
    async def okta_get_user_make_request(
        userId: Annotated[str, Field(description="User ID or login")],
    ) -> List[TextContent]:
        """Get a single Okta user by ID or login."""
        return await users.get_user(client, {"userId": userId}, sanitize_single)

    @tool
    async def okta_update_user_make_request(userId: str, profile: UserProfileUpdate) -> List[TextContent]:
        """Update profile fields of an Okta user. Only the fields given are changed."""
        return await users.update_user(client, {"userId": userId, "profile": profile}, sanitize_single)

    @tool
    async def okta_delete_user_make_request(userId: str) -> List[TextContent]:
        """Deactivate and then delete an Okta user."""
        return await users.delete_user(client, {"userId": userId})

    # ===========================================
    # GROUP TOOLS
    # ===========================================

    @tool
    async def okta_list_groups_make_request(
        limit: Limit = None,
        search: Annotated[Optional[str], Field(description="Search expression for groups")] = None,
    ) -> List[TextContent]:
        """List Okta groups. Nested objects are stripped from each group; only primitive fields are returned."""
        return await groups.list_groups(client, {"limit": limit, "search": search})

    @tool
    async def okta_create_group_make_request(profile: GroupProfile) -> List[TextContent]:
        """Create an Okta group with a name and optional description."""
        return await groups.create_group(client, {"profile": profile}, sanitize_single)

    @tool
    async def okta_assign_user_to_group_make_request(groupId: str, userId: str) -> List[TextContent]:
        """Add a user to an Okta group."""
        return await groups.assign_user_to_group(client, {"groupId": groupId, "userId": userId})

    # ===========================================
    # APPLICATION TOOLS
    # ===========================================

    @tool
    async def okta_list_applications_make_request(
        limit: Limit = None,
        query: Annotated[Optional[str], Field(description="Searches for apps with name or label properties")] = None,
    ) -> List[TextContent]:
        """List Okta applications. Nested objects are stripped from each app; only primitive fields are returned."""
        return await applications.list_applications(client, {"limit": limit, "query": query})

    @tool
    async def okta_assign_user_to_application_make_request(
        appId: str,
        userId: str,
        profile: Optional[Dict[str, Any]] = None,
    ) -> List[TextContent]:
        """Assign a user to an Okta application, optionally with an app-specific profile."""
        return await applications.assign_user_to_application(
            client, {"appId": appId, "userId": userId, "profile": profile}, sanitize_single
        )

    @tool
    async def okta_assign_group_to_application_make_request(appId: str, groupId: str) -> List[TextContent]:
        """Assign a group to an Okta application."""
        return await applications.assign_group_to_application(
            client, {"appId": appId, "groupId": groupId}, sanitize_single
        )

    @tool
    async def okta_delete_application_make_request(
        appId: Annotated[str, Field(description="ID of the application to delete")],
    ) -> List[TextContent]:
        """Delete an Okta application. Okta requires the application to be deactivated first."""
        return await applications.delete_application(client, {"appId": appId})

    @tool
    async def okta_deactivate_application_make_request(
        appId: Annotated[str, Field(description="ID of the application to deactivate")],
    ) -> List[TextContent]:
        """Deactivate an Okta application."""
        return await applications.deactivate_application(client, {"appId": appId})

    return mcp


def load_settings() -> OktaSettings:
    """
    Validate required environment variables before the MCP server starts.
    Exits with code 1 if validation fails.
    """
    logger = configure_logging()
    try:
        settings = OktaSettings.from_env()
    except ConfigurationError as e:
        logger.error(f"CRITICAL: {e}")
        sys.exit(1)

    logger.info(f"Environment validation passed: OKTA_DOMAIN={settings.domain}")
    return settings


def main():
    settings = load_settings()
    mcp = build_server(OktaClient(settings), settings)
    mcp.run()

if __name__ == "__main__":
    main()
