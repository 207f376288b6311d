from pydantic import field_validator
from typing import Optional, List
from datetime import datetime

from models.user import UserRole
from schemas.base import CamelModel, split_list


class UserCreate(CamelModel):
    # Every field is optional here so that the service can report all missing
    # fields at once in its own error payload.
    email: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None


class UserLogin(CamelModel):
    email: str
    password: str


class UserResponse(CamelModel):
    id: int
    email: str
    username: str
    first_name: str
    last_name: str
    role: UserRole
    is_verified: bool = False
    avatar: Optional[str] = None


class AuthResponse(CamelModel):
    message: str
    user: UserResponse
    token: str


class VerifyResponse(CamelModel):
    user: UserResponse


class PublicProfile(CamelModel):
    id: int
    username: str
    first_name: str
    last_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole
    skills: List[str] = []
    interests: List[str] = []
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None
    idea_count: int = 0
    comment_count: int = 0
    vote_count: int = 0

    @field_validator("skills", "interests", mode="before")
    @classmethod
    def none_to_empty_list(cls, v):
        if v is None:
            return []
        return v


class PrivateProfile(PublicProfile):
    email: str
    is_premium: bool = False
    email_verified: bool = False
    updated_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None

    @field_validator("skills", "interests", mode="before")
    @classmethod
    def comma_separated(cls, v):
        return split_list(v)
