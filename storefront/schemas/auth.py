"""
Account API schemas for request validation.

Checks run in a fixed order and the first failure is reported, so each
request model validates as a whole rather than field by field.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..utils.validators import (
    MAX_ADDRESS_LENGTH,
    MAX_ANSWER_LENGTH,
    MAX_USER_NAME_LENGTH,
    is_blank,
    is_short_password,
    is_valid_email,
    is_valid_phone,
)


class RegisterRequest(BaseModel):
    """Request schema for creating a customer account."""
    name: Optional[str] = Field(None, description="Full name")
    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Plain text password")
    phone: Optional[str] = Field(None, description="8-digit phone number starting with 6, 8 or 9")
    address: Optional[str] = Field(None, description="Delivery address")
    answer: Optional[str] = Field(None, description="Security answer for password resets")

    @model_validator(mode="after")
    def validate_registration(self):
        required = [
            ("name", "Name is Required"),
            ("email", "Email is Required"),
            ("password", "Password is Required"),
            ("phone", "Phone no is Required"),
            ("address", "Address is Required"),
            ("answer", "Answer is Required"),
        ]
        for field, message in required:
            if is_blank(getattr(self, field)):
                raise ValueError(message)

        if len(self.name) > MAX_USER_NAME_LENGTH:
            raise ValueError("The name can only be up to 150 characters long")
        if is_short_password(self.password):
            raise ValueError("The length of the password should be at least 6 characters long")
        if not is_valid_email(self.email):
            raise ValueError("The email is in an invalid format")
        if not is_valid_phone(self.phone):
            raise ValueError("The phone number must start with 6,8 or 9 and be 8 digits long")
        if len(self.address) > MAX_ADDRESS_LENGTH:
            raise ValueError("The address can only be up to 150 characters long")
        if len(self.answer) > MAX_ANSWER_LENGTH:
            raise ValueError("The answer can only be up to 100 characters long")
        return self


class LoginRequest(BaseModel):
    """Request schema for logging in."""
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    """Request schema for resetting a password with the security answer."""
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    answer: Optional[str] = None
    new_password: Optional[str] = Field(None, alias="newPassword")

    @model_validator(mode="after")
    def validate_reset(self):
        if is_blank(self.email):
            raise ValueError("Email is required")
        if is_blank(self.answer):
            raise ValueError("An answer is required")
        if is_blank(self.new_password):
            raise ValueError("New Password is required")
        if is_short_password(self.new_password):
            raise ValueError("The length of the new password should be at least 6 characters long")
        if not is_valid_email(self.email):
            raise ValueError("The email is in an invalid format")
        if len(self.answer) > MAX_ANSWER_LENGTH:
            raise ValueError("The answer can only be up to 100 characters long")
        return self


class UpdateProfileRequest(BaseModel):
    """Request schema for profile updates; empty fields keep their stored value."""
    name: Optional[str] = None
    password: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None

    @model_validator(mode="after")
    def validate_profile(self):
        if self.password and is_short_password(self.password):
            raise ValueError("The length of the password should be at least 6 characters long")
        if self.name and len(self.name) > MAX_USER_NAME_LENGTH:
            raise ValueError("The name can only be up to 150 characters long")
        if self.phone and not is_valid_phone(self.phone):
            raise ValueError("The phone number must start with 6,8 or 9 and be 8 digits long")
        if self.address and len(self.address) > MAX_ADDRESS_LENGTH:
            raise ValueError("The address can only be up to 150 characters long")
        return self
