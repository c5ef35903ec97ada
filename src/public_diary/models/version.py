"""Archived entry versions."""

from datetime import datetime

from pydantic import BaseModel, Field

from public_diary.models.preview import make_preview


class DiaryVersion(BaseModel):
    """Content of an entry as it was just before being overwritten."""

    id: int
    entry_date: str
    content: str
    version_number: int = Field(ge=1)
    created_at: datetime

    @property
    def preview(self) -> str:
        """Short excerpt used in listings."""
        return make_preview(self.content)
