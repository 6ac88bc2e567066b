import pytest

from gossipmax.messages import GossipMessage, SubtaskReply, SubtaskRequest


def test_request_defaults():
    msg = SubtaskRequest()
    assert msg.subtask_id == 0
    assert msg.subtask_arr == ""
    assert msg.server_id == 0
    assert msg.is_malicious is False
    assert msg.kind == 0
    assert msg.name is None


def test_reply_defaults():
    msg = SubtaskReply()
    assert (msg.subtask_id, msg.result, msg.server_id) == (0, 0, 0)


def test_gossip_defaults():
    assert GossipMessage().content == ""


@pytest.mark.parametrize("flag, expected", [(0, False), (1, True), (2, True), (3, True)])
def test_request_flag_is_coerced_to_bool(flag, expected):
    msg = SubtaskRequest(subtask_id=1, subtask_arr="1 2", server_id=0, is_malicious=flag)
    assert msg.is_malicious is expected


def test_request_dup_is_equal_and_independent():
    original = SubtaskRequest(subtask_id=3, subtask_arr="5 9 1", server_id=2, is_malicious=True)
    copy = original.dup()
    assert copy == original
    assert copy is not original
    copy.server_id = 4
    copy.subtask_arr = "7"
    assert original.server_id == 2
    assert original.subtask_arr == "5 9 1"


def test_reply_dup_is_equal_and_independent():
    original = SubtaskReply(subtask_id=1, result=42, server_id=3)
    copy = original.dup()
    assert copy == original
    copy.result = -1
    assert original.result == 42


def test_gossip_dup_keeps_content_and_name():
    original = GossipMessage(content="10.0.0.1:1 2 3 ", name="gossip", kind=7)
    copy = original.dup()
    assert copy.content == "10.0.0.1:1 2 3 "
    assert copy.name == "gossip"
    assert copy.kind == 7
    copy.content = "other"
    assert original.content == "10.0.0.1:1 2 3 "


def test_messages_of_different_types_differ():
    assert SubtaskReply(subtask_id=1, server_id=2) != SubtaskRequest(subtask_id=1, server_id=2)