"""Search schemas."""

from pydantic import BaseModel


class EmailBatch(BaseModel):
    """Batch lookup by owner email."""

    emails: list[str]


class UsernameBatch(BaseModel):
    """Batch lookup by owner username."""

    usernames: list[str]
