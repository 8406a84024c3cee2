"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from agora.domain.value.common import RootValueObject

# Usernames may contain word characters, whitespace, dashes, '#' and '!'
USERNAME_PATTERN = re.compile(r"^[\w\d\-\s_#!]+$")


class RelationshipKind(str, Enum):
    """Flags tracked per user/discussion pair."""

    FOLLOWING = "following"
    FAVORITE = "favorite"
    PARTICIPATED = "participated"


class InviteAmount(str, Enum):
    """Symbolic invite amounts understood by the invite ledger."""

    ALL = "all"


class InviteToken(RootValueObject[str]):
    """URL-safe invite token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v
