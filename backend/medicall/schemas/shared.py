# medicall/schemas/shared.py
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire and in the client cache."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class SuccessResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class User(CamelModel):
    """Client session user; never stored server side."""
    id: str
    name: str
    role: str = "executive"
    email: Optional[str] = None


class TimeOffEvent(CamelModel):
    """Client-local calendar block; never reaches the server."""
    id: str
    executive: Optional[str] = None
    title: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    notes: Optional[str] = None
