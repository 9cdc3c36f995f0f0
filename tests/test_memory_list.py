import pytest

from naoqi_converters.base import MessageAction, MissingCallbackError
from naoqi_converters.memory_list import MemoryList, MemoryListConverter, MemoryPair


class FakeMemory:
    def __init__(self, values):
        self.values = values
        self.calls = []

    def call(self, method, *args):
        self.calls.append((method, args))
        return self.values


class FakeSession:
    def __init__(self, services):
        self.services = services
        self.requested = []

    def service(self, name):
        self.requested.append(name)
        return self.services[name]


def make(keys, values, clock=lambda: 7.0):
    memory = FakeMemory(values)
    session = FakeSession({"ALMemory": memory})
    conv = MemoryListConverter(keys, "memory", 5, session, clock=clock)
    return conv, memory, session


def test_asks_memory_service():
    _, _, session = make([], [])
    assert session.requested == ["ALMemory"]


def test_values_sorted_by_type():
    keys = ["a", "b", "c", "d"]
    conv, memory, _ = make(keys, [3, 1.5, "hi", 4])
    seen = []
    conv.register_callback(MessageAction.PUBLISH, seen.append)
    conv.call_all([MessageAction.PUBLISH])
    assert memory.calls == [("getListData", (keys,))]
    msg = seen[0]
    assert msg.ints == [MemoryPair("a", 3), MemoryPair("d", 4)]
    assert msg.floats == [MemoryPair("b", 1.5)]
    assert msg.strings == [MemoryPair("c", "hi")]
    assert msg.header.stamp == 7.0
    assert conv.message is msg


def test_bool_counts_as_int_and_unknown_ignored():
    conv, _, _ = make(["flag", "other"], [True, [1, 2]])
    conv.call_all([])
    assert conv.message.ints == [MemoryPair("flag", 1)]
    assert conv.message.floats == []
    assert conv.message.strings == []


def test_message_is_rebuilt_each_call():
    conv, memory, _ = make(["a"], [1])
    conv.call_all([])
    memory.values = ["s"]
    conv.call_all([])
    assert conv.message.ints == []
    assert conv.message.strings == [MemoryPair("a", "s")]


def test_missing_callback_raises():
    conv, _, _ = make(["a"], [1])
    with pytest.raises(MissingCallbackError):
        conv.call_all([MessageAction.RECORD])


def test_missing_memory_service_raises():
    with pytest.raises(KeyError):
        MemoryListConverter(["a"], "memory", 5, FakeSession({}))


def test_empty_memory_list_defaults():
    msg = MemoryList()
    assert (msg.ints, msg.floats, msg.strings) == ([], [], [])