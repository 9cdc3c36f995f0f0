import pytest

from naoqi_converters.base import MessageAction, MissingCallbackError
from naoqi_converters.events import AudioEventConverter, TouchEventConverter


def test_audio_call_all_reaches_each_action_in_order():
    conv = AudioEventConverter("audio", 1, object())
    seen = []
    conv.register_callback(MessageAction.PUBLISH, lambda m: seen.append(("pub", m)))
    conv.register_callback(MessageAction.RECORD, lambda m: seen.append(("rec", m)))
    msg = {"data": [1, 2, 3]}
    conv.call_all([MessageAction.RECORD, MessageAction.PUBLISH], msg)
    assert seen == [("rec", msg), ("pub", msg)]
    assert conv.message == msg


def test_audio_message_is_a_copy():
    conv = AudioEventConverter("audio", 1, object())
    conv.register_callback(MessageAction.PUBLISH, lambda m: m["data"].append(9))
    msg = {"data": [1]}
    conv.call_all([MessageAction.PUBLISH], msg)
    assert msg == {"data": [1]}
    assert conv.message == {"data": [1, 9]}


def test_audio_unregistered_action_raises():
    conv = AudioEventConverter("audio", 1, object())
    conv.register_callback(MessageAction.LOG, lambda m: None)
    conv.unregister_callback(MessageAction.LOG)
    with pytest.raises(MissingCallbackError):
        conv.call_all([MessageAction.LOG], {})


def test_touch_forwards_message():
    conv = TouchEventConverter("bumper", 1, object())
    seen = []
    conv.register_callback(MessageAction.PUBLISH, seen.append)
    conv.call_all([MessageAction.PUBLISH], ("left", True))
    assert seen == [("left", True)]
    assert conv.message == ("left", True)


def test_touch_no_actions_still_stores_message():
    conv = TouchEventConverter("head", 1, object())
    conv.call_all([], [3])
    assert conv.message == [3]


def test_touch_missing_callback_raises():
    conv = TouchEventConverter("hand", 1, object())
    with pytest.raises(MissingCallbackError):
        conv.call_all([MessageAction.RECORD], "x")