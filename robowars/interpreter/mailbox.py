"""Per-piece mailboxes for messages between robot programs.

Messages are stored on the wire as ``<senderID>@<payload>``. A mailbox is
partitioned by sender: messages from one sender are received in arrival
order, independently of other senders.
"""

from __future__ import annotations

import logging
from typing import Iterator, Protocol

logger = logging.getLogger(__name__)

SEPARATOR = "@"


class MailboxLookup(Protocol):
    """Read-only ID -> Mailbox capability used for recipient resolution."""

    def get(self, piece_id: str) -> Mailbox | None:
        ...


class Mailbox:
    """Bounded inbound message queue owned by one piece."""

    def __init__(
        self,
        capacity: int,
        owner_id: str,
        directory: MailboxLookup | None = None,
    ) -> None:
        self.capacity = capacity
        self.owner_id = owner_id
        self.directory = directory
        self.is_open = True
        self._messages: list[str] = []

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    @property
    def is_empty(self) -> bool:
        return not self._messages

    @property
    def is_full(self) -> bool:
        return len(self._messages) >= self.capacity

    def __len__(self) -> int:
        return len(self._messages)

    def has_message(self, sender_id: str) -> bool:
        """True if a message from *sender_id* is waiting."""
        key = sender_id.casefold()
        return any(_sender_of(m).casefold() == key for m in self._messages)

    def receive_message(self, sender_id: str) -> str | None:
        """Remove and return the oldest payload from *sender_id*, or None."""
        key = sender_id.casefold()
        for i, raw in enumerate(self._messages):
            sender, _, payload = raw.partition(SEPARATOR)
            if sender.casefold() == key:
                del self._messages[i]
                return payload
        return None

    def send_message(self, recipient_id: str, payload: str) -> bool:
        """Deliver *payload* to the recipient's mailbox.

        Returns False, delivering nothing, when either argument is empty or
        the recipient is unknown, closed or full.
        """
        if self.directory is None or not recipient_id or not payload:
            return False
        recipient = self.directory.get(recipient_id)
        if recipient is None or not recipient.is_open:
            logger.debug("%s: no open mailbox for %r", self.owner_id, recipient_id)
            return False
        if recipient.is_full:
            logger.info(
                "%s: mailbox of %s is full (%d messages)",
                self.owner_id, recipient.owner_id, len(recipient),
            )
            return False
        recipient.add_message(f"{self.owner_id}{SEPARATOR}{payload}")
        return True

    def add_message(self, raw: str) -> None:
        self._messages.append(raw)

    def clear(self) -> None:
        """Drop every waiting message, whatever its sender."""
        self._messages.clear()

    def close(self) -> None:
        """Stop accepting deliveries (the owning piece was destroyed)."""
        self.is_open = False
        self.clear()


class MailboxDirectory:
    """Match-wide registry of mailboxes, keyed case-insensitively by piece ID."""

    def __init__(self) -> None:
        self._mailboxes: dict[str, Mailbox] = {}

    def register(self, mailbox: Mailbox) -> None:
        piece_id = mailbox.owner_id
        if not piece_id:
            raise ValueError("Mailbox owner ID must not be empty")
        if SEPARATOR in piece_id:
            raise ValueError(f"Piece ID {piece_id!r} contains reserved separator {SEPARATOR!r}")
        key = piece_id.casefold()
        if key in self._mailboxes:
            raise ValueError(f"Mailbox for '{piece_id}' already registered")
        mailbox.directory = self
        self._mailboxes[key] = mailbox

    def create(self, owner_id: str, capacity: int) -> Mailbox:
        mailbox = Mailbox(capacity, owner_id)
        self.register(mailbox)
        return mailbox

    def get(self, piece_id: str) -> Mailbox | None:
        return self._mailboxes.get(piece_id.casefold())

    def close(self, piece_id: str) -> None:
        mailbox = self.get(piece_id)
        if mailbox is None:
            raise KeyError(f"Unknown mailbox: {piece_id}")
        mailbox.close()

    def __contains__(self, piece_id: object) -> bool:
        return isinstance(piece_id, str) and piece_id.casefold() in self._mailboxes

    def __iter__(self) -> Iterator[Mailbox]:
        return iter(self._mailboxes.values())

    def __len__(self) -> int:
        return len(self._mailboxes)


def _sender_of(raw: str) -> str:
    return raw.partition(SEPARATOR)[0]
