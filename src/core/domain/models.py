"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The input file and the API payload are both plain JSON; validating them at
  the edge keeps the rest of the flow free of shape checks.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

# One vectorized /questions/{ids} call accepts at most this many ids.
MAX_QUESTION_IDS = 100

_DATE_FORMAT = "%Y-%m-%d"


def date_to_epoch(value: date) -> int:
    """Unix seconds at 00:00:00 UTC of `value`."""

    return int(datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp())


class ExportConfig(BaseModel):
    """The input file: which questions to fetch and where to write them."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    output: Path = Field(
        ...,
        description="Destination file for the exported rows.",
    )
    from_date: date | None = Field(
        default=None,
        alias="from",
        description="Lower creation-date bound (YYYY-MM-DD), sent as `fromdate`.",
    )
    to_date: date | None = Field(
        default=None,
        alias="to",
        description="Upper creation-date bound (YYYY-MM-DD), sent as `todate`.",
    )
    question_ids: list[str] = Field(
        ...,
        alias="questions",
        min_length=1,
        max_length=MAX_QUESTION_IDS,
        description="Question identifiers, normalized to decimal strings.",
    )
    site: str | None = Field(
        default=None,
        min_length=1,
        description="Stack Exchange site; falls back to the configured default.",
    )

    @field_validator("output", mode="before")
    @classmethod
    def _require_output(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            raise ValueError("output path must not be empty")
        return value

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def _parse_day(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return datetime.strptime(text, _DATE_FORMAT).date()
            except ValueError as exc:
                raise ValueError(f"expected a YYYY-MM-DD date, got {value!r}") from exc
        return value

    @field_validator("question_ids", mode="before")
    @classmethod
    def _normalize_ids(cls, value: Any) -> Any:
        if not isinstance(value, list):
            raise ValueError("questions must be a list of identifiers")

        seen: set[str] = set()
        ids: list[str] = []
        for raw in value:
            # bool is an int subclass; `true` is never a question id.
            if isinstance(raw, bool):
                raise ValueError(f"invalid question id {raw!r}")
            if isinstance(raw, int):
                text = str(raw)
            elif isinstance(raw, str):
                text = raw.strip()
            else:
                raise ValueError(f"invalid question id {raw!r}")
            if not (text.isascii() and text.isdigit()) or int(text) <= 0:
                raise ValueError(f"invalid question id {raw!r}")
            text = str(int(text))
            if text not in seen:
                seen.add(text)
                ids.append(text)
        return ids

    @model_validator(mode="after")
    def _check_range(self) -> "ExportConfig":
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValueError(f"'from' ({self.from_date}) is after 'to' ({self.to_date})")
        return self

    @property
    def from_timestamp(self) -> int | None:
        return date_to_epoch(self.from_date) if self.from_date else None

    @property
    def to_timestamp(self) -> int | None:
        return date_to_epoch(self.to_date) if self.to_date else None


class Owner(BaseModel):
    """Shallow user object embedded in each question."""

    model_config = ConfigDict(extra="ignore")

    user_id: int | None = None
    display_name: str | None = None
    reputation: int | None = None
    user_type: str | None = Field(
        default=None,
        description="registered, unregistered, moderator, team_admin or does_not_exist.",
    )
    link: str | None = None


class Question(BaseModel):
    """A question as returned by `/questions/{ids}` with the default filter."""

    model_config = ConfigDict(extra="ignore")

    question_id: int = Field(..., description="Numeric question identifier.")
    title: str = Field(..., description="Title, HTML-entity encoded by the API.")
    link: str = Field(..., description="Canonical URL of the question.")
    tags: list[str] = Field(default_factory=list)
    owner: Owner | None = None
    is_answered: bool = False
    view_count: int = 0
    answer_count: int = 0
    score: int = 0
    creation_date: datetime = Field(..., description="Creation time (UTC).")
    last_activity_date: datetime | None = None
    last_edit_date: datetime | None = Field(
        default=None,
        description="Absent when the question was never edited.",
    )


class QuestionsResponse(BaseModel):
    """Common wrapper object around `items`."""

    model_config = ConfigDict(extra="ignore")

    items: list[Question] = Field(default_factory=list)
    has_more: bool = False
    quota_max: int | None = None
    quota_remaining: int | None = None


class ApiErrorPayload(BaseModel):
    """Error body returned instead of the wrapper when a call fails."""

    model_config = ConfigDict(extra="ignore")

    error_id: int
    error_name: str = ""
    error_message: str = ""
