"""Messages exchanged between clients and servers."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional


@dataclass
class SubtaskRequest:
    """A client asks a server to compute the maximum of a chunk of numbers.

    ``subtask_arr`` holds the numbers as space-separated text. A request whose
    ``is_malicious`` flag is false tells the server to answer dishonestly.
    """

    subtask_id: int = 0
    subtask_arr: str = ""
    server_id: int = 0
    is_malicious: bool = False
    name: Optional[str] = None
    kind: int = 0

    def __post_init__(self) -> None:
        self.is_malicious = bool(self.is_malicious)

    def dup(self) -> SubtaskRequest:
        """Return an independent copy of this message."""
        return dataclasses.replace(self)


@dataclass
class SubtaskReply:
    """A server's answer for one subtask."""

    subtask_id: int = 0
    result: int = 0
    server_id: int = 0
    name: Optional[str] = None
    kind: int = 0

    def dup(self) -> SubtaskReply:
        """Return an independent copy of this message."""
        return dataclasses.replace(self)


@dataclass
class GossipMessage:
    """Score report passed from client to client, as ``"<ip>:<scores>"``."""

    content: str = ""
    name: Optional[str] = None
    kind: int = 0

    def dup(self) -> GossipMessage:
        """Return an independent copy of this message."""
        return dataclasses.replace(self)