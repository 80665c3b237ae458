"""Shared DTO building blocks."""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from .enums import CountryCode


class WorldpayModel(BaseModel):
    """Base for every DTO: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready body the gateway expects."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Address(WorldpayModel):
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country_code: Optional[CountryCode] = None
    telephone_number: Optional[str] = None


class Entry(WorldpayModel):
    """Single key/value pair of an ordered identifier list."""
    key: str
    value: str


def _entries_from_wire(value: Any) -> Any:
    # The gateway sends identifiers as a JSON object; member order is significant.
    if isinstance(value, dict):
        return [{"key": k, "value": v} for k, v in value.items()]
    return value


def _unique_keys(entries: List[Entry]) -> List[Entry]:
    seen = set()
    for entry in entries:
        if entry.key in seen:
            raise ValueError(f"duplicate identifier key: {entry.key}")
        seen.add(entry.key)
    return entries


def _entries_to_wire(entries: List[Entry]) -> Dict[str, str]:
    return {entry.key: entry.value for entry in entries}


CustomerIdentifiers = Annotated[
    List[Entry],
    BeforeValidator(_entries_from_wire),
    AfterValidator(_unique_keys),
    PlainSerializer(_entries_to_wire),
]


class ApiError(WorldpayModel):
    """Error envelope returned by the gateway for every non-2xx response."""
    http_status_code: Optional[int] = None
    custom_code: Optional[str] = None
    message: str = ""
    description: Optional[str] = None
    error_help_url: Optional[str] = None
    original_request: Optional[str] = None
