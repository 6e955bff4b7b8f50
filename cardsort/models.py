"""Input models for card-sorting sessions and study exports.

These are Pydantic models so that exported JSON documents (camelCase keys)
validate on load.  Field names are snake_case in Python; the camelCase
aliases match the application's export format.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SortingMode(str, Enum):
    """Whether participants invent categories or sort into a fixed set."""

    OPEN = "open"
    CLOSED = "closed"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Card(_CamelModel):
    """One item to be sorted.  Identity is ``id``."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str | None = None


class Category(_CamelModel):
    """A category as it existed at the end of a session."""

    id: str
    name: str
    card_ids: list[str] = Field(default_factory=list)
    is_user_created: bool = False


class Placement(_CamelModel):
    """One participant's assignment of one card to one category.

    ``category_id`` is the stable identity (session-scoped for open sorts,
    study-scoped for closed sorts).  ``category_name`` is the display label
    and is never used as an identity.
    """

    card_id: str
    category_id: str
    category_name: str
    position: int = 0
    card_label: str | None = None
    placed_at: int | None = None  # epoch ms


class Participant(_CamelModel):
    """Who sorted and when.  ``completed_at`` is None for abandoned sessions."""

    id: str = ""
    display_id: str = ""
    started_at: int | None = None  # epoch ms
    completed_at: int | None = None  # epoch ms
    duration: float | None = None  # ms


class SortingSession(_CamelModel):
    """One participant's sort.

    A card may be placed at most once per session; a second placement for
    the same card is rejected here rather than letting analysis pick one.
    """

    id: str
    study_id: str = ""
    mode: SortingMode = SortingMode.OPEN
    participant: Participant = Field(default_factory=Participant)
    cards: list[Card] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    placements: list[Placement] = Field(default_factory=list)

    @model_validator(mode="after")
    def _one_placement_per_card(self) -> SortingSession:
        seen: set[str] = set()
        for placement in self.placements:
            if placement.card_id in seen:
                raise ValueError(
                    f"session {self.id!r} places card {placement.card_id!r} more than once"
                )
            seen.add(placement.card_id)
        return self

    @property
    def is_completed(self) -> bool:
        return self.participant.completed_at is not None


class StudyInfo(_CamelModel):
    """The slice of a study definition the analysis needs."""

    id: str
    name: str
    description: str | None = None
    mode: SortingMode = SortingMode.OPEN
    cards: list[Card] = Field(default_factory=list)


class StudyExport(_CamelModel):
    """Top-level export document: a study plus all of its sessions."""

    version: str = "1.0"
    exported_at: int | None = None
    study: StudyInfo
    sessions: list[SortingSession] = Field(default_factory=list)
