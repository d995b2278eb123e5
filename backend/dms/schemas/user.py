from datetime import datetime

from pydantic import BaseModel, Field

from dms.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=255)
    role: UserRole
    department: str | None = Field(default=None, max_length=100)


class PasswordChange(BaseModel):
    password: str


class UserResponse(BaseModel):
    id: int
    username: str
    role: UserRole
    department: str | None
    created_at: datetime | None = None
    created_by: str | None = None

    model_config = {"from_attributes": True}


class UserCreateResponse(BaseModel):
    id: int
    message: str


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    success: bool
    user: UserResponse | None = None
    message: str | None = None
