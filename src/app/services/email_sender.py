from abc import ABC, abstractmethod

from pydantic import BaseModel


class EmailMessage(BaseModel):
    """Rendered outbound email"""

    to: str
    subject: str
    html: str
    text: str


class EmailDeliveryError(Exception):
    """Raised when a message could not be handed to the mail transport"""


class IEmailSender(ABC):
    """Outbound email port - application layer"""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Send a message or raise EmailDeliveryError"""
        pass
