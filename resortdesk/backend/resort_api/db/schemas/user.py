from datetime import datetime
from pydantic import BaseModel, Field
from ..models.user import UserRole


class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    username: str = Field(min_length=3, max_length=64)
    email: str = Field(min_length=3, max_length=255)
    role: UserRole = UserRole.pool_staff
    is_active: bool = True


class UserCreate(UserBase):
    password: str = Field(min_length=6)


class UserUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = Field(default=None, min_length=6)
    role: UserRole | None = None
    is_active: bool | None = None


class User(UserBase):
    id: int
    last_login_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PasswordChange(BaseModel):
    password: str = Field(min_length=6)
