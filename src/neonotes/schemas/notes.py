"""
Note Schemas

Pydantic models for the persisted entities (User, Comment, Note) and the
note-related API request/response bodies.

Attribute names are snake_case in Python; JSON (both the persisted records
and the HTTP payloads) uses camelCase aliases, so a stored ``isPremium`` or
``createdAt`` field decodes unchanged.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase while accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRole(StrEnum):
    STUDENT = "student"
    AUTHOR = "author"
    ADMIN = "admin"


class User(CamelModel):
    """Account identity. Embedded as a snapshot in notes, never referenced."""

    id: str
    name: str
    email: str
    role: UserRole
    avatar: str


class Comment(CamelModel):
    """Reply attached to one note; author fields are a denormalized snapshot."""

    id: str
    user_id: str
    user_name: str
    user_avatar: str
    content: str
    created_at: str


class Note(CamelModel):
    """
    Shareable study document.

    Attributes:
        content: Plain text used as AI context; a placeholder when only a
            file was uploaded.
        comments: Newest first.
        file_data: Attached file as a base64 data URI.
        price: Only kept when ``is_premium`` is true. New and edited notes
            must carry one when premium; stored ones may not.
    """

    id: str
    title: str
    description: str
    content: str
    course: str
    year: str
    subject: str
    tags: list[str] = Field(default_factory=list)
    thumbnail: str
    author: User
    downloads: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    is_premium: bool = False
    price: float | None = Field(default=None, ge=0)
    created_at: str
    comments: list[Comment] = Field(default_factory=list)
    file_data: str | None = None
    file_name: str | None = None
    mime_type: str | None = None

    @model_validator(mode="after")
    def _drop_free_price(self) -> "Note":
        # Stored records may predate price checks: a premium note can lack a
        # price, a free one never keeps one.
        if not self.is_premium:
            self.price = None
        return self

    @property
    def missing_price(self) -> bool:
        """True for a premium note without a price."""
        return self.is_premium and self.price is None


class NoteDraft(CamelModel):
    """User-supplied fields of a new upload (everything else is derived)."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    content: str = ""
    course: str = ""
    year: str = ""
    subject: str = ""
    tags: list[str] = Field(default_factory=list)
    is_premium: bool = False
    price: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_price(self) -> "NoteDraft":
        if self.is_premium and self.price is None:
            raise ValueError("premium notes require a price")
        return self


class Attachment(CamelModel):
    """Encoded file payload stored inline on a note."""

    file_data: str
    file_name: str
    mime_type: str


class CommentCreate(BaseModel):
    """Request schema for POST /notes/{id}/comments."""

    content: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(CamelModel):
    """Both records rewritten by a like toggle."""

    notes: list[Note]
    liked_ids: list[str]


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class NoteDownload(BaseModel):
    """File handed to the client when a note is downloaded."""

    file_name: str
    mime_type: str
    content_disposition: str
    data: bytes


class AdminStats(CamelModel):
    """Aggregates shown on the admin dashboard."""

    total_notes: int
    total_downloads: int
    total_likes: int
    premium_notes: int
    estimated_revenue: float
    pending_review: list[Note] = Field(default_factory=list)
