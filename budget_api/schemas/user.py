from typing import List, Optional
from pydantic import BaseModel, Field


class UserRegister(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    theme: Optional[str] = None


class UserResponse(BaseModel):
    id: str = Field(serialization_alias="_id")
    name: str
    email: str
    tags: List[str] = []
    theme: Optional[str] = None

    class Config:
        from_attributes = True


class AuthResponse(UserResponse):
    token: str
