"""
User, agent and principal Pydantic models
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from world_property.models.enums import PrincipalType, UserRole


class PublicUser(BaseModel):
    id: str
    email: str
    name: str
    role: UserRole
    created_at: datetime
    last_login_at: datetime


class AgentProfile(BaseModel):
    user_id: str
    company: Optional[str] = None
    phone: Optional[str] = None
    license_number: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AgentAccount(BaseModel):
    user: PublicUser
    profile: AgentProfile


class Principal(BaseModel):
    type: PrincipalType
    id: str

    @property
    def key(self) -> str:
        return f"{self.type.value}:{self.id}"


class SignInRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=120)
    role: UserRole = UserRole.USER


class SignInResponse(BaseModel):
    email: str
    name: str
    role: UserRole
    last_login_at: datetime


class UserRegistrationRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=120)


class AgentRegistrationRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=120)
    company: Optional[str] = Field(None, min_length=2, max_length=160)
    phone: Optional[str] = Field(None, min_length=6, max_length=40)
    license_number: Optional[str] = Field(None, max_length=80)
    bio: Optional[str] = Field(None, max_length=1200)


class PreferencesData(BaseModel):
    display_currency: str = "GBP"


class PreferencesUpdateRequest(BaseModel):
    display_currency: str = Field(..., min_length=3, max_length=3)
