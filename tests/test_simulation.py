import pytest

from gossipmax.simulation import Network, main

INT_MIN = -(2**31)


def test_single_server_single_client_finds_maximum():
    net = Network(1, ["3 9 4"], seed=1)
    net.run()
    assert net.clients[0].cumulative_result == 9
    assert net.clients[0].task_done


def test_run_drains_queue():
    net = Network(1, ["3 9 4"], seed=1)
    first = net.run()
    assert first > 0
    assert net.run() == 0
    assert net.events_processed == first


def test_two_clients_reach_second_round():
    net = Network(1, ["5 1 7", "2 8 6"], seed=3)
    net.run()
    for client, task in zip(net.clients, [[5, 1, 7], [2, 8, 6]]):
        assert client.round1_done
        assert client.top_servers == [0]
        assert client.cumulative_result == max(task)


def test_three_servers_three_clients_invariants():
    tasks = ["1 2 3 4 5 6", "10 20 30 40 50 60", "7 7 7 7 7 7"]
    net = Network(3, tasks, seed=42)
    net.run()
    for client, task in zip(net.clients, tasks):
        values = [int(v) for v in task.split()]
        assert client.round1_done
        assert len(client.top_servers) == 2
        assert len(set(client.top_servers)) == 2
        assert all(0 <= s < 3 for s in client.top_servers)
        assert INT_MIN < client.cumulative_result <= max(values)


def test_same_seed_is_deterministic():
    tasks = ["1 2 3 4 5 6", "10 20 30 40 50 60"]
    a = Network(3, tasks, seed=7)
    b = Network(3, tasks, seed=7)
    count_a = a.run()
    count_b = b.run()
    assert count_a == count_b
    assert [c.cumulative_result for c in a.clients] == [c.cumulative_result for c in b.clients]
    assert [c.top_servers for c in a.clients] == [c.top_servers for c in b.clients]


def test_max_events_limits_and_resumes():
    tasks = ["1 2 3 4 5 6", "10 20 30 40 50 60"]
    whole = Network(3, tasks, seed=5)
    total = whole.run()

    stepped = Network(3, tasks, seed=5)
    assert stepped.run(1) == 1
    rest = stepped.run()
    assert rest == total - 1
    assert [c.cumulative_result for c in stepped.clients] == [
        c.cumulative_result for c in whole.clients
    ]


def test_client_without_task_stays_idle():
    net = Network(1, ["4 2 8", ""], seed=2)
    net.run()
    assert net.clients[1].cumulative_result == INT_MIN
    assert not net.clients[1].task_done
    assert net.clients[0].cumulative_result == 8


def test_default_ips_are_distinct():
    net = Network(2, ["1 2", "3 4", "5 6"], seed=0)
    ips = [c.ip for c in net.clients]
    assert len(set(ips)) == 3


def test_custom_ips_are_used():
    net = Network(1, ["1", "2"], ips=["host-a", "host-b"], seed=0)
    assert [c.ip for c in net.clients] == ["host-a", "host-b"]


def test_mismatched_ips_rejected():
    with pytest.raises(ValueError):
        Network(2, ["1 2", "3 4"], ips=["only-one"])


def test_zero_servers_rejected():
    with pytest.raises(ValueError):
        Network(0, ["1 2"])


def test_no_clients_rejected():
    with pytest.raises(ValueError):
        Network(2, [])


def test_main_prints_result(capsys):
    code = main(["--servers", "1", "--task", "3 9 4", "--seed", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "max 9" in out
    assert "Client 0" in out


def test_main_requires_task():
    with pytest.raises(SystemExit):
        main(["--servers", "2"])