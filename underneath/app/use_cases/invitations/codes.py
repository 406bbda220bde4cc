import secrets
import string
from datetime import datetime
from typing import Optional

from underneath.domain.entities import Invitation
from underneath.result import Error

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8


def generate_invitation_code() -> str:
    """Random 8-character code drawn from A-Z and 0-9"""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def redeemability_error(invitation: Invitation, now: datetime) -> Optional[Error]:
    """Why an existing invitation cannot be redeemed, or None if it can"""
    if not invitation.is_active:
        return Error(
            "INVITATION_ALREADY_USED", "This invitation code has already been used"
        )
    if invitation.is_expired(now):
        return Error("INVITATION_EXPIRED", "This invitation code has expired")
    return None
