"""Domain services."""

from . import trust
from .account_service import AccountService, OpenIDNormalizer, safe_attributes
from .activity_service import ActivityService
from .base import Service
from .conversation_service import (
    ConversationPartner,
    ConversationService,
    UnreadCountCache,
)
from .counter_cache_service import CounterCacheService
from .credential_service import CredentialService, PasswordChange
from .invite_service import InviteService

__all__ = [
    "AccountService",
    "ActivityService",
    "ConversationPartner",
    "ConversationService",
    "CounterCacheService",
    "CredentialService",
    "InviteService",
    "OpenIDNormalizer",
    "PasswordChange",
    "Service",
    "UnreadCountCache",
    "safe_attributes",
    "trust",
]
