from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterUserIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str
    role: str = "user"
    phone: Optional[str] = Field(None, max_length=15)


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    role: str


class PrincipalOut(BaseModel):
    user_id: int
    role: str
