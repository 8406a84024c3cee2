"""Invite use cases."""

from agora.application.usecase.invite.adjust_invites import (
    AdjustInvitesRequest,
    AdjustInvitesResponse,
    AdjustInvitesUseCase,
)
from agora.application.usecase.invite.send_invite import (
    SendInviteRequest,
    SendInviteResponse,
    SendInviteUseCase,
)

__all__ = [
    "AdjustInvitesRequest",
    "AdjustInvitesResponse",
    "AdjustInvitesUseCase",
    "SendInviteRequest",
    "SendInviteResponse",
    "SendInviteUseCase",
]
