from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# Pydantic models for serialization and validation

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=255, description="User's username")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserPublic(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserProfile(UserPublic):
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    message: str
    user: UserPublic
    token: str


class ProfileResponse(BaseModel):
    user: UserProfile


class NoteRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = Field(default="", description="Note content")


class NoteOut(BaseModel):
    id: int
    title: str
    content: str
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteResponse(BaseModel):
    note: NoteOut


class NoteMessageResponse(BaseModel):
    message: str
    note: NoteOut


class NoteListResponse(BaseModel):
    notes: List[NoteOut]


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
