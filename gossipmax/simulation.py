"""Wires clients and servers together and runs the message exchange."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence

from gossipmax.client import OUT, PEER_OUT, Client
from gossipmax.server import Server

log = logging.getLogger(__name__)

_INT_MIN = -(2**31)


@dataclass
class _Delivery:
    to_server: bool
    target: int
    message: object
    arrival_gate: int


class Network:
    """Every client is linked to every server and to every other client.

    Client ``c`` reaches server ``s`` through its ``out`` gate ``s`` and the
    reply comes back on server gate ``c``. Peer gate ``i`` of client ``c``
    leads to the ``i``-th other client in index order. Messages travel
    without delay and are delivered in the order they were sent.
    """

    def __init__(
        self,
        num_servers: int,
        tasks: Sequence[str],
        ips: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
    ) -> None:
        if num_servers < 1:
            raise ValueError("the number of servers must be positive")
        tasks = list(tasks)
        if not tasks:
            raise ValueError("at least one client is needed")
        if ips is None:
            ips = [f"10.0.0.{i + 1}" for i in range(len(tasks))]
        ips = list(ips)
        if len(ips) != len(tasks):
            raise ValueError("every client needs exactly one IP address")

        self.rng = random.Random(seed)
        num_clients = len(tasks)
        self.servers: List[Server] = [Server(i, self.rng) for i in range(num_servers)]
        self.clients: List[Client] = [
            Client(i, num_servers, num_clients, ip, task, num_clients - 1, self.rng)
            for i, (ip, task) in enumerate(zip(ips, tasks))
        ]
        self.events_processed = 0
        self._queue: Deque[_Delivery] = deque()
        self._started = False

    def _peer_of(self, client: int, gate: int) -> int:
        return gate if gate < client else gate + 1

    def _enqueue_from_client(self, client: int, sends) -> None:
        for gate_name, gate, message in sends:
            if gate_name == OUT:
                self._queue.append(_Delivery(True, gate, message, client))
            elif gate_name == PEER_OUT:
                peer = self._peer_of(client, gate)
                arrival = client if client < peer else client - 1
                self._queue.append(_Delivery(False, peer, message, arrival))
            else:
                raise ValueError(f"unknown gate {gate_name!r}")

    def _enqueue_from_server(self, sends) -> None:
        for gate, message in sends:
            self._queue.append(_Delivery(False, gate, message, -1))

    def _start(self) -> None:
        self._started = True
        for client in self.clients:
            self._enqueue_from_client(client.index, client.start())

    def run(self, max_events: Optional[int] = None) -> int:
        """Deliver messages until none are left or *max_events* were handled.

        Returns the number of messages delivered during this call.
        """
        if not self._started:
            self._start()
        handled = 0
        while self._queue and (max_events is None or handled < max_events):
            delivery = self._queue.popleft()
            if delivery.to_server:
                server = self.servers[delivery.target]
                self._enqueue_from_server(
                    server.handle_message(delivery.message, delivery.arrival_gate)
                )
            else:
                client = self.clients[delivery.target]
                self._enqueue_from_client(
                    client.index,
                    client.handle_message(delivery.message, delivery.arrival_gate),
                )
            handled += 1
        self.events_processed += handled
        return handled


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gossipmax",
        description="Find the maximum of each client's task with possibly dishonest servers.",
    )
    parser.add_argument("--servers", type=int, default=3, help="number of servers")
    parser.add_argument(
        "--task", action="append", default=[],
        help="space-separated numbers for one client; repeat for more clients",
    )
    parser.add_argument("--ip", action="append", default=None, help="IP of one client")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--max-events", type=int, default=None, help="stop after this many messages")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every step")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a network from the command line and print each client's result."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.task:
        parser.error("give at least one --task")
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")
    try:
        network = Network(args.servers, args.task, args.ip, args.seed)
        network.run(args.max_events)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for client in network.clients:
        if client.cumulative_result == _INT_MIN:
            outcome = "incomplete"
        else:
            outcome = str(client.cumulative_result)
        top = " ".join(map(str, client.top_servers)) or "-"
        print(f"Client {client.index} ({client.ip}): max {outcome}; top servers {top}")
    return 0


if __name__ == "__main__":
    sys.exit(main())