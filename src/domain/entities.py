from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# --- Enums / Literals ---
CustomFieldType = Literal["text", "select", "multiselect"]

CUSTOMFIELD_DELIMITER = "##SEPARATOR##"

# --- Signup Status Codes ---

STATUS_USER_CANCELLED = 10
STATUS_SESSION_CANCELLED = 20
STATUS_DECLINED = 30
STATUS_REQUESTED = 40
STATUS_APPROVED = 50
STATUS_WAITLISTED = 60
STATUS_BOOKED = 70
STATUS_NO_SHOW = 80
STATUS_PARTIALLY_ATTENDED = 90
STATUS_FULLY_ATTENDED = 100

SIGNUP_STATUSES: dict[int, str] = {
    STATUS_USER_CANCELLED: "user_cancelled",
    STATUS_SESSION_CANCELLED: "session_cancelled",
    STATUS_DECLINED: "declined",
    STATUS_REQUESTED: "requested",
    STATUS_APPROVED: "approved",
    STATUS_WAITLISTED: "waitlisted",
    STATUS_BOOKED: "booked",
    STATUS_NO_SHOW: "no_show",
    STATUS_PARTIALLY_ATTENDED: "partially_attended",
    STATUS_FULLY_ATTENDED: "fully_attended",
}


class UnknownStatusError(ValueError):
    """Raised for a signup status code outside SIGNUP_STATUSES."""


def get_status_name(statuscode: int) -> str:
    try:
        return SIGNUP_STATUSES[statuscode]
    except KeyError:
        raise UnknownStatusError(f"Unknown signup status code: {statuscode}") from None


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are stored values and therefore UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)

# --- Custom Fields ---

class CustomField(BaseModel):
    id: int
    name: str
    shortname: str = ""
    type: CustomFieldType = "text"
    showinsummary: bool = True

class CustomFieldData(BaseModel):
    fieldid: int
    data: str = ""

# --- Sessions ---

class SessionDate(BaseModel):
    timestart: datetime
    timefinish: datetime
    sessiontimezone: str | None = None

    @field_validator("timestart", "timefinish")
    @classmethod
    def _normalise_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

class BookedSession(BaseModel):
    """The viewer's live booking within an activity."""
    sessionid: int
    statuscode: int

class FacetofaceSession(BaseModel):
    id: int
    facetoface: int
    capacity: int = 10
    datetimeknown: bool = True
    sessiondates: list[SessionDate] = Field(default_factory=list)
    customfielddata: dict[int, CustomFieldData] = Field(default_factory=dict)
    allowcancellations: bool = True
    bookedsession: BookedSession | None = None

class Signup(BaseModel):
    sessionid: int
    userid: int
    statuscode: int = STATUS_BOOKED

# --- Settings Panel Sources ---

class Role(BaseModel):
    id: int
    shortname: str
    name: str = ""
    localname: str | None = None

class ProfileField(BaseModel):
    shortname: str
    name: str

class SiteNotice(BaseModel):
    id: int
    name: str
    text: str = ""
