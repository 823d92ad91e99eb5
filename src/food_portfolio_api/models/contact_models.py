"""Contact message models.

These models represent inquiries stored in the ``contact_messages`` table
and the request bodies accepted by the contact endpoints.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ContactStatus(str, Enum):
    """Enumeration of contact message status values."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


def is_valid_email(email: str) -> bool:
    """Check an address against the basic syntactic email pattern."""
    return EMAIL_PATTERN.match(email) is not None


class ContactMessage(BaseModel):
    """Contact message record as stored in the database."""

    id: str = Field(..., description="Unique identifier assigned by the database")
    name: str = Field(..., description="Sender name")
    email: str = Field(..., description="Sender email address")
    phone: str | None = Field(None, description="Sender phone number")
    event_type: str | None = Field(None, description="Type of event being planned")
    guests: int | None = Field(None, description="Expected number of guests")
    preferred_date: date | None = Field(None, description="Preferred event date")
    message: str = Field(..., description="Inquiry text")
    status: ContactStatus = Field(default=ContactStatus.NEW, description="Processing status")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ContactMessage":
        """Create a ContactMessage from a database row."""
        return cls.model_validate(record)


class ContactCreate(BaseModel):
    """Public contact form submission.

    Accepts the form's ``eventType`` and ``date`` keys as well as the
    column names ``event_type`` and ``preferred_date``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    event_type: str | None = Field(
        None, validation_alias=AliasChoices("eventType", "event_type")
    )
    guests: int | None = Field(None, ge=0)
    preferred_date: date | None = Field(
        None, validation_alias=AliasChoices("date", "preferred_date")
    )
    message: str | None = None

    def to_record(self, timestamp: datetime) -> dict[str, Any]:
        """Normalize into the full column set for insertion.

        Args:
            timestamp: Value used for both created_at and updated_at

        Returns:
            dict: Store-ready row; new messages always start as ``new``
        """
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone or None,
            "event_type": self.event_type or None,
            "guests": self.guests or None,
            "preferred_date": self.preferred_date.isoformat() if self.preferred_date else None,
            "message": self.message,
            "status": ContactStatus.NEW.value,
            "created_at": timestamp.isoformat(),
            "updated_at": timestamp.isoformat(),
        }


class ContactStatusUpdate(BaseModel):
    """Request body for a status change; membership is checked by the handler."""

    status: str | None = None
