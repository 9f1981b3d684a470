# Tools package
"""
Okta MCP Server Tools

Modules:
- common: response sanitization, text envelope, failure wrapping
- schemas: pydantic input models for every tool
- basic: connection testing
- users: list/create/get/update/delete users
- groups: list/create groups, group membership
- applications: list applications, user/group assignment, delete/deactivate
"""

from . import common, schemas, basic, users, groups, applications

__all__ = ["common", "schemas", "basic", "users", "groups", "applications"]
