"""Care record domain models and enums."""

from datetime import UTC, datetime, timedelta
from enum import StrEnum
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from care_ledger.core.config import Constants


# Epoch used by Foundation's default Date encoding in ledgers written by the iOS app
APPLE_REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=UTC)


class CareTaskType(StrEnum):
    """Kind of care work performed. Values are the persisted labels."""

    EMOTIONAL_SUPPORT = "Emotional Support"
    GROUP_WORK = "Group Project Labor"
    MENTORING = "Peer Mentoring"
    SPACE_KEEPING = "Space Tending"
    CONFLICT_MEDIATION = "Conflict Mediation"
    ADMINISTRATION = "Admin/Organizing"
    TRANSLATION = "Cultural Translation"
    LISTENING = "Active Listening"


class RecipientType(StrEnum):
    """Who the care work was for. Values are the persisted labels."""

    PEER = "Peer/Friend"
    ROOMMATE = "Roommate"
    GROUP_PROJECT = "Group Project"
    FAMILY = "Family"
    COMMUNITY = "Community/Campus"
    SELF = "Self"


class CareRecordDraft(BaseModel):
    """User-supplied fields for a new care record, before id and timestamp are assigned."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    task_type: CareTaskType = Field(..., description="Kind of care work performed")
    recipient_type: RecipientType = Field(..., description="Who the care work was for")
    emotional_weight: int = Field(
        default=Constants.DEFAULT_EMOTIONAL_WEIGHT,
        ge=Constants.MIN_EMOTIONAL_WEIGHT,
        le=Constants.MAX_EMOTIONAL_WEIGHT,
        strict=True,
        description="Emotional cost on a 1 (light) to 5 (heavy) scale",
    )
    time_spent_minutes: int = Field(
        default=Constants.DEFAULT_TIME_SPENT_MINUTES,
        ge=Constants.MIN_TIME_SPENT_MINUTES,
        le=Constants.MAX_TIME_SPENT_MINUTES,
        strict=True,
        validation_alias=AliasChoices("timeSpentMinutes", "time_spent_minutes", "timeSpent"),
        serialization_alias="timeSpentMinutes",
        description="Minutes spent on the work",
    )
    notes: str = Field(default="", description="Free-form notes, may be empty")
    was_visible: bool = Field(
        default=False,
        strict=True,
        description="Whether the work was acknowledged by others",
    )


class CareRecord(CareRecordDraft):
    """A persisted, immutable care labor entry."""

    model_config = ConfigDict(extra="ignore")

    id: UUID = Field(..., description="Unique record ID, never reused")
    timestamp: datetime = Field(..., description="When the record was created (UTC)")

    @field_validator("timestamp", mode="before")
    @classmethod
    def decode_reference_date(cls, v: object) -> object:
        """Read numeric timestamps as seconds since 2001-01-01T00:00:00Z."""
        if isinstance(v, int | float) and not isinstance(v, bool):
            try:
                return APPLE_REFERENCE_DATE + timedelta(seconds=v)
            except OverflowError as e:
                msg = f"Timestamp out of range: {v} seconds since 2001-01-01"
                raise ValueError(msg) from e
        return v

    @field_validator("timestamp")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @classmethod
    def from_draft(cls, draft: CareRecordDraft, *, record_id: UUID, timestamp: datetime) -> "CareRecord":
        """Build a record from a validated draft plus its generated identity."""
        return cls(id=record_id, timestamp=timestamp, **draft.model_dump())

    @property
    def is_invisible(self) -> bool:
        """Whether this is invisible labor (not acknowledged by others)."""
        return not self.was_visible
