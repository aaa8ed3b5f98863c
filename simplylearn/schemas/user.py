from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from simplylearn.models.user import Role


def lower_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class ProfileData(BaseModel):
    bio: str = ""
    avatar: str = ""


class ProfileDataUpdate(BaseModel):
    bio: Optional[str] = Field(default=None, max_length=2000)
    avatar: Optional[str] = Field(default=None, max_length=1024)


class UserCreate(BaseModel):
    name: str = Field(default="", max_length=255)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    role: Role = Role.STUDENT

    normalize_email = field_validator("email", mode="before")(lower_email)

    @field_validator("name")
    @classmethod
    def _trim_name(cls, v: str) -> str:
        return v.strip()


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    is_verified: bool
    profile_data: ProfileData

    class Config:
        from_attributes = True


class UserSession(UserRead):
    access_token: str
    token_type: str = "bearer"


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=72)
    profile_data: Optional[ProfileDataUpdate] = None

    normalize_email = field_validator("email", mode="before")(lower_email)
