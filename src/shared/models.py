from typing import Literal, Optional

from pydantic import BaseModel


# ── Posts ─────────────────────────────────────────────────────────────────────

class Post(BaseModel):
    """A stored post. `id` is assigned once on create and survives slug renames."""

    id: str
    slug: str
    title: str
    markdown: str      # raw markdown body, never rendered server-side


class PostListing(BaseModel):
    slug: str
    title: str


class PostDraft(BaseModel):
    """The validated form triple handed to the repository."""

    title: str
    slug: str
    markdown: str


class PostFormErrors(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    markdown: Optional[str] = None


# ── Editor UI ─────────────────────────────────────────────────────────────────

Intent = Literal["create", "update"]


class SubmitButton(BaseModel):
    label: str
    intent: Intent
    disabled: bool = False
