"""Diary entry models."""

from datetime import datetime

from pydantic import BaseModel

from public_diary.models.preview import make_preview
from public_diary.models.version import DiaryVersion

MAX_CONTENT_LENGTH = 10_000


class DiaryEntry(BaseModel):
    """The text written for one diary day."""

    date: str
    content: str
    created_at: datetime
    updated_at: datetime

    @property
    def preview(self) -> str:
        """Short excerpt used in listings."""
        return make_preview(self.content)


class SaveOutcome(BaseModel):
    """Result of saving today's entry."""

    entry: DiaryEntry
    archived: DiaryVersion | None = None
