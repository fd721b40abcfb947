"""Auth and registration schemas."""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field


class RegistrationStep1Request(BaseModel):
    full_name: str = Field(min_length=2, max_length=255)
    date_of_birth: date
    mobile_number: str = Field(min_length=10, max_length=20, pattern=r"^\+?[0-9]+$")
    country_code: str = Field(default="+91", pattern=r"^\+[0-9]{1,4}$")
    address: str = Field(min_length=10)


class RegistrationStep1Response(BaseModel):
    registration_token: str
    expires_at: datetime


class RegistrationStep2Request(BaseModel):
    registration_token: str
    email: EmailStr
    password: str = Field(min_length=8)


class LoginRequest(BaseModel):
    identifier: str = Field(min_length=1, description="Email or mobile number")
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    is_admin: bool = False


class UserMe(BaseModel):
    id: int
    email: str
    full_name: str
    mobile_number: str | None
    country_code: str
    address: str | None
    date_of_birth: date | None
    account_status: str
    is_verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AdminMe(BaseModel):
    email: str
    full_name: str
    is_admin: bool = True


class RegistrationResponse(TokenResponse):
    user: UserMe


class UpdateProfileRequest(BaseModel):
    full_name: str | None = Field(default=None, min_length=2, max_length=255)
    address: str | None = Field(default=None, min_length=10)
