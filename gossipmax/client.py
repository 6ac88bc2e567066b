"""A client that splits a task across servers and gossips server scores."""

from __future__ import annotations

import logging
import random
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from gossipmax.messages import GossipMessage, SubtaskReply, SubtaskRequest
from gossipmax.server import parse_numbers

log = logging.getLogger(__name__)

OUT = "out"
PEER_OUT = "peerOut"

_INT_MIN = -(2**31)

Send = Tuple[str, int, object]


def split_task(task: Iterable[int], num_servers: int) -> List[str]:
    """Split *task* into subtasks, each rendered as space-separated text.

    Chunks start every ``ceil(len / num_servers)`` elements and hold at most
    ``len // num_servers`` elements, so some elements may fall between chunks.
    """
    if num_servers < 1:
        raise ValueError("the number of servers must be positive")
    values = list(task)
    if not values:
        return []
    total = len(values)
    step = -(-total // num_servers)
    width = total // num_servers
    return [
        " ".join(str(v) for v in values[start:min(start + width, total)])
        for start in range(0, total, step)
    ]


def majority_voting(replies: Iterable[Tuple[int, int]]) -> int:
    """Return the result reported most often among ``(result, server)`` pairs.

    Ties go to the smallest result; with no replies the answer is -1.
    """
    counts: Dict[int, int] = defaultdict(int)
    for result, _server in replies:
        counts[result] += 1

    log.debug(
        "Voting results: %s",
        " | ".join(f"{value} -> {count} votes" for value, count in sorted(counts.items())),
    )

    majority, best = -1, 0
    for value, count in sorted(counts.items()):
        if count > best:
            majority, best = value, count
    return majority


def format_scores(ip: str, scores: Iterable[int]) -> str:
    """Build a gossip message body: ``"<ip>:<score> <score> ... "``."""
    return ip + ":" + "".join(f"{score} " for score in scores)


def parse_scores(content: str, num_servers: int) -> List[int]:
    """Read up to *num_servers* scores from a gossip message body.

    Scores follow the first ``:``; without one the whole text is read. Scores
    that are missing or unreadable are zero.
    """
    _head, sep, rest = content.partition(":")
    body = rest if sep else content
    numbers = parse_numbers(body)[:num_servers]
    return numbers + [0] * (num_servers - len(numbers))


class Client:
    """Distributes a max-finding task, scores servers and gossips the scores.

    Methods that produce traffic return the messages to send as
    ``(gate_name, gate_index, message)`` tuples, where the gate name is
    ``"out"`` for servers and ``"peerOut"`` for other clients.
    """

    def __init__(
        self,
        index: int,
        num_servers: int,
        num_clients: int,
        ip: str,
        task: str,
        peer_count: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.index = index
        self.num_servers = num_servers
        self.total_clients = num_clients - 1
        self.ip = ip
        self.peer_count = peer_count
        self.rng = rng if rng is not None else random.Random()

        self.has_task = bool(task)
        self.task: List[int] = parse_numbers(task) if task else []
        self.total_subtasks: Optional[int] = num_servers if task else None

        self.score = [0] * num_servers
        self.avg_score = [0] * num_servers
        self.replies: Dict[int, List[Tuple[int, int]]] = defaultdict(list)
        self.subtask_completed = 0
        self.cumulative_result = _INT_MIN
        self.task_done = False
        self.received_messages: set = set()
        self.start_ind = 1
        self.gossip_cnt = 0
        self.top_servers: List[int] = []
        self.round1_done = False

        log.info("Client %d initialized with task: %s", index, task)

    @property
    def quorum(self) -> int:
        """Number of servers each subtask goes to."""
        return self.num_servers // 2 + 1

    def start(self) -> List[Send]:
        """Send every subtask to a random majority of the servers."""
        if not self.has_task:
            log.info("Client %d has no task assigned.", self.index)
            return []
        return self._send_subtasks(self._random_servers)

    def _random_servers(self) -> List[int]:
        selected: set = set()
        while len(selected) < self.quorum:
            selected.add(self.rng.randint(0, self.num_servers - 1))
        return sorted(selected)

    def _send_subtasks(self, pick: Callable[[], Sequence[int]]) -> List[Send]:
        sends: List[Send] = []
        for subtask_id, chunk in enumerate(split_task(self.task, self.num_servers)):
            choose = self.start_ind
            for server in pick():
                request = SubtaskRequest(
                    subtask_id=subtask_id,
                    subtask_arr=chunk,
                    server_id=server,
                    is_malicious=bool(choose % 4),
                )
                choose += 1
                sends.append((OUT, server, request))
                log.info(
                    "Client %d sent subtask %s (%d) to Server %d",
                    self.index, chunk, subtask_id, server,
                )
            self.start_ind += 1
        return sends

    def handle_message(self, msg: object, arrival_gate: int = -1) -> List[Send]:
        """Handle one incoming message and return what it causes to be sent.

        *arrival_gate* is the index of the peer gate a gossip message came in
        on; it is not forwarded back there.
        """
        sends: List[Send] = []

        if isinstance(msg, SubtaskReply):
            self._record_reply(msg)

        if self.subtask_completed == self.total_subtasks and not self.task_done:
            log.info(
                "Client %d has got the maximum value for the task which is %d",
                self.index, self.cumulative_result,
            )
            sends.extend(self.broadcast_scores())
            self.task_done = True

        if isinstance(msg, GossipMessage) and not self.round1_done:
            sends.extend(self._absorb_gossip(msg, arrival_gate))
            if self.gossip_cnt == self.total_clients:
                self.round1_done = True
                ranked = sorted(
                    ((score, server) for server, score in enumerate(self.avg_score)),
                    reverse=True,
                )
                self.top_servers = [server for _score, server in ranked[: self.quorum]]
                log.info(
                    "Selected top %d servers for second round: %s",
                    self.quorum, " ".join(map(str, self.top_servers)),
                )
                sends.extend(self.begin_second_round())

        return sends

    def _record_reply(self, reply: SubtaskReply) -> None:
        votes = self.replies[reply.subtask_id]
        votes.append((reply.result, reply.server_id))
        log.info(
            "Client %d received reply for subtask %d from Server %d",
            self.index, reply.subtask_id, reply.server_id,
        )
        if len(votes) != self.quorum:
            return

        self.subtask_completed += 1
        final = majority_voting(votes)
        log.info("Final computed value for subtask %d is: %d", reply.subtask_id, final)
        self.cumulative_result = max(self.cumulative_result, final)
        for result, server in votes:
            if result == final:
                self.score[server] += 1

    def _absorb_gossip(self, msg: GossipMessage, arrival_gate: int) -> List[Send]:
        content = msg.content
        if content in self.received_messages:
            return []

        self.gossip_cnt += 1
        self.received_messages.add(content)
        sender, sep, _rest = content.partition(":")
        log.info("Client %d received gossip from %s", self.index, sender if sep else "Unknown")

        for server, value in enumerate(parse_scores(content, self.num_servers)):
            self.avg_score[server] += value
        log.debug("Updated avg_score array: %s", self.avg_score)

        return [
            (PEER_OUT, gate, msg.dup())
            for gate in range(self.peer_count)
            if gate != arrival_gate
        ]

    def broadcast_scores(self) -> List[Send]:
        """Send this client's server scores to every peer, once."""
        message = format_scores(self.ip, self.score)
        log.info("Constructed gossip message: %s", message)

        for server, value in enumerate(self.score):
            self.avg_score[server] += value

        if message in self.received_messages:
            log.info("Skipping broadcast: message already sent.")
            return []
        self.received_messages.add(message)

        gossip = GossipMessage(content=message)
        return [(PEER_OUT, gate, gossip.dup()) for gate in range(self.peer_count)]

    def begin_second_round(self) -> List[Send]:
        """Forget first-round replies and resend every subtask to the top servers."""
        log.info("Client %d starting second round", self.index)
        self.replies.clear()
        self.cumulative_result = _INT_MIN
        return self._send_subtasks(lambda: self.top_servers)