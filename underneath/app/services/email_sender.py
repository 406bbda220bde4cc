from abc import ABC, abstractmethod
from typing import Optional


class EmailSender(ABC):
    """Outbound email collaborator - application layer"""

    @abstractmethod
    async def send_invitation_email(
        self,
        to_email: str,
        code: str,
        dom_name: str,
        message: Optional[str] = None,
    ) -> bool:
        """
        Send an invitation code.

        Returns True if the email was handed to the mail server. Never raises
        for delivery problems; callers only surface the flag.
        """
        pass
