from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from models import to_timestamp

Category = Literal["Academic", "Cultural", "Sports", "Technical"]


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RegisterIn(_Body):
    username: str = Field(min_length=1, max_length=80)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    is_admin: bool = Field(default=False, alias="isAdmin")


class LoginIn(_Body):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class EventIn(_Body):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    venue: str = Field(min_length=1)
    date: datetime
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    image_url: str = Field(min_length=1, alias="imageUrl")
    category: Category
    featured: bool = False
    organizer: str = Field(min_length=1)
    # Upload payloads are accepted and discarded.
    image_file: Any = Field(default=None, alias="imageFile", exclude=True)

    @model_validator(mode="after")
    def check_end_date(self):
        if self.end_date is not None and to_timestamp(self.end_date) < to_timestamp(self.date):
            raise ValueError("endDate must not be before date")
        return self

    def to_record(self):
        return self.model_dump()


class EventPatch(_Body):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    venue: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    image_url: Optional[str] = Field(default=None, min_length=1, alias="imageUrl")
    category: Optional[Category] = None
    featured: Optional[bool] = None
    organizer: Optional[str] = Field(default=None, min_length=1)
    image_file: Any = Field(default=None, alias="imageFile", exclude=True)

    @model_validator(mode="after")
    def check_nulls(self):
        for name in self.model_fields_set:
            if name in ("end_date", "image_file"):
                continue
            if getattr(self, name) is None:
                alias = type(self).model_fields[name].alias or name
                raise ValueError(f"{alias} cannot be null")
        return self

    def to_changes(self):
        """Only the fields the client sent; an explicit endDate null survives."""
        return self.model_dump(exclude_unset=True)


class RegistrationIn(_Body):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    event_id: int = Field(alias="eventId")
    full_name: str = Field(min_length=1, alias="fullName")
    email: EmailStr
    phone: str = Field(min_length=1, max_length=32)
    tickets: int = Field(ge=1)

    @field_validator("tickets", mode="before")
    @classmethod
    def reject_bool_tickets(cls, value):
        if isinstance(value, bool):
            raise ValueError("tickets must be a number")
        return value
