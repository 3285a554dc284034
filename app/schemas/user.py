"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional

from app.models.user import UserRole


class SignUpRequest(BaseModel):
    """Schema for self-registration."""
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alex",
                "email": "alex@example.com",
                "password": "secret123"
            }
        }
    )


class SignInRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=1, max_length=72)


class UserCreate(SignUpRequest):
    """Schema for an admin creating a user with an explicit role."""
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole
    
    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
