"""
Input models for every tool. FastMCP advertises these as the tool schemas and
the tool functions validate against them before calling Okta.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field

# --- USERS ---

class ListUsersInput(BaseModel):
    limit: Optional[int] = Field(default=None, description="Number of results to return (default 20)")
    query: Optional[str] = Field(default=None, description="search a user by firstName, lastName, or email.")


class UserProfile(BaseModel):
    firstName: str
    lastName: str
    email: EmailStr
    login: EmailStr


class PasswordCredential(BaseModel):
    value: str


class UserCredentials(BaseModel):
    password: Optional[PasswordCredential] = None


class CreateUserInput(BaseModel):
    profile: UserProfile
    credentials: Optional[UserCredentials] = None


class UserIdInput(BaseModel):
    userId: str = Field(description="User ID or login")


class UserProfileUpdate(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[EmailStr] = None
    login: Optional[EmailStr] = None


class UpdateUserInput(BaseModel):
    userId: str
    profile: UserProfileUpdate

# --- GROUPS ---

class ListGroupsInput(BaseModel):
    limit: Optional[int] = Field(default=None, description="Number of results to return (default 20)")
    search: Optional[str] = Field(default=None, description="Search expression for groups")


class GroupProfile(BaseModel):
    name: str = Field(description="Name of the group")
    description: Optional[str] = None


class CreateGroupInput(BaseModel):
    profile: GroupProfile


class AssignUserToGroupInput(BaseModel):
    groupId: str
    userId: str

# --- APPLICATIONS ---

class ListApplicationsInput(BaseModel):
    limit: Optional[int] = Field(default=None, description="Number of results to return (default 20)")
    query: Optional[str] = Field(default=None, description="Searches for apps with name or label properties")


class AssignUserToApplicationInput(BaseModel):
    appId: str
    userId: str
    profile: Optional[Dict[str, Any]] = None


class AssignGroupToApplicationInput(BaseModel):
    appId: str
    groupId: str


class AppIdInput(BaseModel):
    appId: str = Field(description="ID of the application")
