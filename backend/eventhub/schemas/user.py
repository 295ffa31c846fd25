"""
Pydantic schemas for signup and login.
"""

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    # Email is stored as given, case-sensitive, so no normalizing EmailStr here
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    message: str
    token: str
