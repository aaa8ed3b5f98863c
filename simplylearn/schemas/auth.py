from pydantic import BaseModel, EmailStr, Field, field_validator

from simplylearn.schemas.user import lower_email


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)

    normalize_email = field_validator("email", mode="before")(lower_email)


class VerifyEmailRequest(BaseModel):
    email: EmailStr
    otp: str = Field(min_length=1, max_length=16)

    normalize_email = field_validator("email", mode="before")(lower_email)


class ResendOtpRequest(BaseModel):
    email: EmailStr

    normalize_email = field_validator("email", mode="before")(lower_email)


class MessageOut(BaseModel):
    message: str
