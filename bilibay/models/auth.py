"""
Request/response models for identity and profile endpoints
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only hashes the first 72 bytes and newer releases refuse longer input
PASSWORD_MAX_BYTES = 72


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


class UserRole(str, Enum):
    """Roles gating route access"""

    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class ShippingAddress(BaseModel):
    """Shipping address as stored on users and frozen on orders"""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    province: str = ""
    zip_code: str = ""
    country: str = "Philippines"


class UserCreate(BaseModel):
    """Registration payload"""

    first_name: str = Field(..., min_length=1, max_length=100)
    middle_name: Optional[str] = Field(None, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    phone: Optional[str] = Field(None, max_length=30)
    birthday: Optional[date] = None
    role: UserRole = UserRole.BUYER

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    validate_password_bytes = field_validator("password")(check_password_bytes)


class UserUpdate(BaseModel):
    """Profile update; omitted fields are left unchanged"""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    middle_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    birthday: Optional[date] = None
    default_shipping_address: Optional[ShippingAddress] = None


class User(BaseModel):
    """Public user profile (never carries secrets)"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    full_name: str
    email: str
    phone: Optional[str] = None
    birthday: Optional[date] = None
    role: UserRole
    email_verified: bool = False
    is_active: bool = True
    default_shipping_address: Optional[ShippingAddress] = None
    created_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    """JSON login payload"""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Access token plus the profile it was issued for"""

    access_token: str
    token_type: str = "bearer"
    user: User


class TokenPayload(BaseModel):
    """Claims carried by access tokens"""

    sub: Optional[str] = None
    role: Optional[UserRole] = None
    exp: Optional[int] = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8, max_length=128)

    validate_password_bytes = field_validator("new_password")(check_password_bytes)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)

    validate_password_bytes = field_validator("new_password")(check_password_bytes)


class MessageResponse(BaseModel):
    message: str


class UserPage(BaseModel):
    """Admin user listing"""

    items: list[User]
    total: int
    page: int
    limit: int
    pages: int
