"""Trust and role derivation.

Pure functions over a user's stored flags. ``admin`` implies every other
capability; everything else that makes an access decision (listing
visibility, invite gates, trusted categories) asks these functions rather
than reading the raw flags.
"""

from agora.domain.model.user import User

# Displayed allowance for users exempt from the invite quota
UNLIMITED_INVITES = 1


def is_trusted(user: User) -> bool:
    """Trusted users see trusted categories and discussions."""
    return user.trusted or user.admin


def is_user_admin(user: User) -> bool:
    """User admins manage other accounts and are exempt from invite quotas."""
    return user.user_admin or user.admin


def is_moderator(user: User) -> bool:
    return user.moderator or user.admin


def can_manage_invites(user: User) -> bool:
    return is_user_admin(user)


def effective_available_invites(user: User) -> int:
    """Invites the user may still send, ``UNLIMITED_INVITES`` for user admins."""
    if is_user_admin(user):
        return UNLIMITED_INVITES
    return user.available_invites


def is_listed(user: User) -> bool:
    """Whether the user shows up in public user listings."""
    return user.activated and not user.banned


def can_log_in(user: User) -> bool:
    return user.activated and not user.banned
