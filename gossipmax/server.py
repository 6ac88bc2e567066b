"""A server that computes the maximum of a subtask, honestly or not."""

from __future__ import annotations

import logging
import random
import re
from typing import Iterable, List, Optional, Tuple

from gossipmax.messages import SubtaskReply, SubtaskRequest

log = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s*")
_INTEGER = re.compile(r"[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def parse_numbers(text: str) -> List[int]:
    """Read whitespace-separated 32-bit integers from *text*.

    Reading stops at the first position that does not start an integer, or
    at an integer that does not fit in 32 bits; that value is not included.
    """
    numbers: List[int] = []
    pos = 0
    while True:
        pos = _WHITESPACE.match(text, pos).end()
        match = _INTEGER.match(text, pos)
        if match is None:
            return numbers
        value = int(match.group())
        if not _INT_MIN <= value <= _INT_MAX:
            return numbers
        numbers.append(value)
        pos = match.end()


def max_element(values: Iterable[int]) -> int:
    """Return the largest value; raise ValueError when there is none."""
    items = list(values)
    if not items:
        raise ValueError("cannot take the maximum of an empty subtask")
    return max(items)


class Server:
    """Answers subtask requests with the maximum of the numbers they carry.

    A request whose ``is_malicious`` flag is false makes the server lie: it
    subtracts a random amount between 1 and 5 from the true maximum.
    """

    def __init__(self, index: int, rng: Optional[random.Random] = None) -> None:
        self.index = index
        self.rng = rng if rng is not None else random.Random()
        log.info("Server %d initialized.", index)

    def handle_message(self, msg: object, arrival_gate: int) -> List[Tuple[int, SubtaskReply]]:
        """Handle one incoming message.

        Returns the messages to send as ``(out_gate_index, reply)`` pairs; a
        reply goes back through the gate index the request arrived on.
        Messages other than subtask requests produce nothing.
        """
        if not isinstance(msg, SubtaskRequest):
            return []

        numbers = parse_numbers(msg.subtask_arr)
        log.info(
            "Server %d received subtask %d from Client at gate %d",
            self.index, msg.subtask_id, arrival_gate,
        )

        if msg.is_malicious:
            result = max_element(numbers)
            log.info(
                "Server %d is acting HONESTLY for subtask %d. Sending correct result: %d",
                self.index, msg.subtask_id, result,
            )
        else:
            result = max_element(numbers) - self.rng.randint(1, 5)
            log.info(
                "Server %d is acting MALICIOUSLY for subtask %d. Sending incorrect result: %d",
                self.index, msg.subtask_id, result,
            )

        reply = SubtaskReply(
            subtask_id=msg.subtask_id,
            result=result,
            server_id=msg.server_id,
        )
        log.info(
            "Server %d sending result %d for subtask %d to client via gate %d",
            self.index, result, msg.subtask_id, arrival_gate,
        )
        return [(arrival_gate, reply)]