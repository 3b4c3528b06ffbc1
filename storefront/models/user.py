"""
User data models for database documents.
"""
from datetime import datetime, timezone
from pydantic import BaseModel, Field

USER_ROLE = 0
ADMIN_ROLE = 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserDocument(BaseModel):
    """
    User document model representing the MongoDB document structure.
    ``password`` holds the bcrypt hash, never the plain text.
    """
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Login email, unique per user")
    password: str = Field(..., description="bcrypt password hash")
    phone: str = Field(..., description="Contact phone number")
    address: str = Field(..., description="Delivery address")
    answer: str = Field(..., description="Security answer used to reset the password")
    role: int = Field(default=USER_ROLE, description="0 for customers, 1 for admins")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
