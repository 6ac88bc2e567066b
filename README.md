# gossipmax

A small in-process simulation of a trust-building protocol between
clients and servers.

Each client holds a task: a string of space-separated integers whose
maximum it wants. It splits the task into subtasks and sends every subtask
to a random majority (`n // 2 + 1`) of the `n` servers. A server answers
with the maximum of its subtask, or, when told to act dishonestly, with
that maximum minus a random amount from 1 to 5. The client settles each
subtask by majority vote (ties go to the smallest value) and gives a point
to every server that agreed with the winning value.

Once a client has settled `n` subtasks it gossips its score table to its
peers. Gossip is forwarded to every peer except the one it arrived from,
and duplicates are dropped. When a client has heard from every other
client it sums the scores, picks the best-scoring majority of servers and
sends its whole task again, this time only to those servers.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the test suite:

```
pip install ".[test]"
pytest
```

## Running a simulation

The `gossipmax` command needs at least one `--task`, given once per client:

```
gossipmax --servers 4 --task "3 9 1 7 4 8 2 6" --task "5 1 12 6 3 2 11 4" --seed 1
```

Options:

- `--servers N` – number of servers (default 3).
- `--task "..."` – space-separated numbers for one client; repeat for more
  clients.
- `--ip ADDR` – IP of one client; repeat once per client. Without it the
  clients get `10.0.0.1`, `10.0.0.2`, ...
- `--seed S` – random seed, for a repeatable run.
- `--max-events K` – stop after delivering this many messages.
- `-v`, `--verbose` – log every step.

When the run ends it prints one line per client:

```
Client 0 (10.0.0.1): max 9; top servers 2 0 1
```

`max` is the largest settled subtask value (`incomplete` if no subtask was
settled after the last reset) and `top servers` are the servers chosen for
the second round (`-` if the client never got that far). Invalid input,
such as a subtask that comes out empty, is reported as `error: ...` with
exit status 1.

## Using it from Python

```python
from gossipmax.simulation import Network

network = Network(
    num_servers=4,
    tasks=["3 9 1 7 4 8 2 6", "5 1 12 6 3 2 11 4"],
    ips=["10.0.0.1", "10.0.0.2"],
    seed=1,
)
delivered = network.run(max_events=10_000)
for client in network.clients:
    print(client.index, client.cumulative_result, client.top_servers)
```

`Network.run` delivers queued messages in order until none are left or
`max_events` were handled, and returns how many it delivered; it can be
called again to continue. `network.events_processed` keeps the running
total.

The building blocks can also be used on their own:

- `gossipmax.messages` holds the three message dataclasses,
  `SubtaskRequest`, `SubtaskReply` and `GossipMessage`, each with a `dup()`
  copy. A `SubtaskRequest` whose `is_malicious` flag is false tells the
  server to answer dishonestly.
- `gossipmax.server` holds `Server`, whose `handle_message(msg,
  arrival_gate)` answers a `SubtaskRequest` with a list of
  `(gate, SubtaskReply)` pairs, together with `parse_numbers` and
  `max_element`.
- `gossipmax.client` holds `Client`, whose `start()`, `handle_message()`,
  `broadcast_scores()` and `begin_second_round()` return the messages to
  send as `(gate_name, gate_index, message)` tuples, and the helpers it is
  built on: `split_task` divides a task into subtask strings,
  `majority_voting` settles a list of `(result, server_id)` replies, and
  `format_scores` / `parse_scores` write and read the `IP:score score ...`
  gossip format.

```python
from gossipmax.client import majority_voting, split_task

majority_voting([(9, 0), (7, 1), (9, 2)])  # 9
split_task([3, 9, 1, 7, 4, 8, 2, 6], 4)   # ['3 9', '1 7', '4 8', '2 6']
```

Random choices come from the `random.Random` instance passed in (or, in
`Network`, one built from `seed`), so a fixed seed gives a repeatable run.

## What it does not do

- There is no real networking: all nodes live in one process, every client
  is linked to every server and every other client, and messages arrive
  without delay in the order they were sent.
- Chunks start every `ceil(len / n)` numbers and hold at most `len // n`
  numbers, so some numbers may be skipped. A client only gossips after
  settling exactly `n` subtasks; a task that splits into fewer chunks never
  reaches the gossip round, and a task shorter than `n` gives empty
  subtasks, which a server rejects with `ValueError`.