"""
Tests for callback payload encoding and decoding
"""

import pytest

from eqbot.constants import MAX_CALLBACK_DATA_LENGTH
from eqbot.events import Event, EventKind, decode_callback, encode_callback
from eqbot.views import emotion_menu_view, home_view, intensity_view, multi_select_view
from eqbot.schemas import UserRecord


class TestDecodeCallback:

    @pytest.mark.parametrize("payload,kind", [
        ("menu:emotions", EventKind.OPEN_EMOTIONS),
        ("menu:multi", EventKind.OPEN_MULTI),
        ("multi:confirm", EventKind.CONFIRM_MULTI),
        ("journal:cancel", EventKind.CANCEL),
        ("nav:back", EventKind.BACK),
        ("nav:done_delete", EventKind.DONE_AND_DELETE),
        ("breath:start", EventKind.START_BREATHING),
        ("breath:stop", EventKind.STOP_BREATHING),
    ])
    def test_simple_payloads(self, payload, kind):
        assert decode_callback(payload) == Event(kind)

    def test_argument_payloads(self):
        assert decode_callback("emotion:Joy") == Event(EventKind.CHOOSE_EMOTION, "Joy")
        assert decode_callback("intensity:2") == Event(EventKind.CHOOSE_INTENSITY, "2")
        assert decode_callback("toggle:Fear") == Event(EventKind.TOGGLE_EMOTION, "Fear")

    @pytest.mark.parametrize("payload", [None, "", "garbage", "emotion:", "intensity:high", "text", "reset"])
    def test_unrecognized_payloads_are_unknown(self, payload):
        assert decode_callback(payload).kind is EventKind.UNKNOWN


class TestEncodeCallback:

    def test_argument_required(self):
        with pytest.raises(ValueError):
            encode_callback(EventKind.CHOOSE_EMOTION)

    def test_text_is_not_a_button(self):
        with pytest.raises(ValueError):
            encode_callback(EventKind.TEXT, "hello")

    def test_intensity_index(self):
        assert encode_callback(EventKind.CHOOSE_INTENSITY, 3) == "intensity:3"

    def test_rendered_buttons_decode_and_fit_telegram(self):
        """Every payload the views emit decodes to a real event"""
        views = [
            home_view(UserRecord(user_id=1)),
            emotion_menu_view(),
            intensity_view("Joy"),
            multi_select_view({"Joy"}),
        ]
        for view in views:
            for row in view.buttons:
                for _, payload in row:
                    assert len(payload.encode()) <= MAX_CALLBACK_DATA_LENGTH
                    assert decode_callback(payload).kind is not EventKind.UNKNOWN
