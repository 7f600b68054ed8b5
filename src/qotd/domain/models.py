import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fixed namespace so ids derived from names survive restarts
CATALOG_NAMESPACE = uuid.UUID("6f1c2a3e-9d4b-5e7f-8a1b-2c3d4e5f6a7b")


def stable_id(*parts: str) -> uuid.UUID:
    return uuid.uuid5(CATALOG_NAMESPACE, "/".join(parts))


# --- Entities ---
class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    text: str
    options: tuple[str, ...] | None = None

    @field_validator("options")
    @classmethod
    def _options_not_empty(cls, v: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if v is not None and len(v) == 0:
            raise ValueError("options must be None (free text) or non-empty")
        return v

    @property
    def is_multiple_choice(self) -> bool:
        return self.options is not None


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    name: str
    icon: str
    questions: tuple[Question, ...]

    @field_validator("questions")
    @classmethod
    def _has_questions(cls, v: tuple[Question, ...]) -> tuple[Question, ...]:
        if not v:
            raise ValueError("a category needs at least one question")
        return v


# --- Persisted Schema ---
class TrackerSnapshot(BaseModel):
    """
    Typed view of everything the tracker keeps in the key-value store.
    Missing keys map to the defaults below.
    """

    last_selected_category: int | None = None
    last_answered_at: datetime | None = None
    last_answer: str = ""
    answered_dates: set[str] = Field(default_factory=set)
    answered_categories_for_today: set[uuid.UUID] = Field(default_factory=set)


# --- (Data Transfer Object) ---
class DayStatus(BaseModel):
    """One dot of the calendar strip."""

    day: date
    answered: bool
    is_today: bool = False
