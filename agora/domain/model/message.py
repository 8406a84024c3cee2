"""Private message entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import MessageId, UserId


class Message(DomainModel):
    """Directed private message.

    One row backs both the sender's outbox and the recipient's inbox.
    Soft deletion is per side: ``deleted`` hides it from the recipient,
    ``deleted_by_sender`` from the sender.
    """

    id: MessageId
    sender_id: UserId
    recipient_id: UserId
    subject: Optional[str] = None
    body: str
    read: bool = False
    deleted: bool = False
    deleted_by_sender: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.sender_id, self.recipient_id)
