"""Domain value objects for BandLab.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import base64
import binascii
import json
from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from pydantic import AwareDatetime, field_validator

from bandlab.domain.error import ValidationError
from bandlab.domain.value.common import RootValueObject, ValueObject
from bandlab.domain.value.identifiers import PostId


class EventType(str, Enum):
    """Domain events fanned out to downstream consumers."""

    POST_CREATED = "PostCreated"
    COMMENT_ADDED = "CommentAdded"


class Creator(RootValueObject[str]):
    """Identity of whoever created a post or comment.

    Supplied by the authentication layer in front of the service.
    """

    @field_validator("root")
    @classmethod
    def validate_creator(cls, v: str) -> str:
        """Validate creator is not empty and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Creator must be 1-255 characters")
        return v


class ImageRef(RootValueObject[str]):
    """Key of a post image in the object store."""

    @field_validator("root")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate the key is a relative, non-empty path."""
        if not v or v.startswith("/") or len(v) > 1024:
            raise ValueError("Image reference must be a relative key of 1-1024 characters")
        return v


class PostCursor(ValueObject):
    """Keyset position in the newest-first post listing.

    Encoded as URL-safe base64 JSON so clients treat it as opaque.
    """

    created_at: AwareDatetime
    post_id: PostId

    def encode(self) -> str:
        """Serialize the cursor for clients."""
        raw = json.dumps(
            {"created_at": self.created_at.isoformat(), "post_id": str(self.post_id)}
        ).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii")

    @classmethod
    def decode(cls, token: str) -> "PostCursor":
        """Parse a cursor previously produced by ``encode``.

        Raises:
            ValidationError: If the token is not a valid cursor
        """
        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
            data = json.loads(raw.decode("utf-8"))
            return cls(
                created_at=datetime.fromisoformat(data["created_at"]),
                post_id=PostId(UUID(data["post_id"])),
            )
        except (
            binascii.Error,
            UnicodeError,
            json.JSONDecodeError,
            KeyError,
            TypeError,
            ValueError,
            PydanticValidationError,
        ) as e:
            raise ValidationError("Invalid cursor") from e
