import json

import pytest

from schedule_checker.domain.errors import MALFORMED_PAYLOAD, NO_RESPONSE, ResponseDecodeError
from schedule_checker.infrastructure.parsing.model_response import decode_response, strip_code_fence

PAYLOAD = json.dumps(
    {
        "classes": [
            {"day": "Monday", "time": "7:30 AM", "className": "Barre 57", "trainer": "Anisha", "theme": None},
            {"day": "Tuesday", "time": "6:00 PM", "className": "FIT", "trainer": "Richard", "theme": "SLAY"},
        ],
        "rawText": "MONDAY 7:30 AM BARRE 57 - Anisha",
    }
)


@pytest.mark.parametrize(
    "wrapped",
    [
        f"```json\n{PAYLOAD}\n```",
        f"```\n{PAYLOAD}\n```",
        f"  ```JSON {PAYLOAD}```  ",
        f"\n{PAYLOAD}\n",
    ],
)
def test_fenced_payload_decodes_like_bare_json(wrapped):
    assert decode_response(wrapped) == decode_response(PAYLOAD)


def test_decoded_payload_exposes_classes_and_raw_text():
    payload = decode_response(PAYLOAD)

    assert len(payload.classes) == 2
    assert payload.classes[1]["theme"] == "SLAY"
    assert payload.raw_text == "MONDAY 7:30 AM BARRE 57 - Anisha"


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_empty_response_is_no_response(text):
    with pytest.raises(ResponseDecodeError) as excinfo:
        decode_response(text)

    assert excinfo.value.reason == NO_RESPONSE


def test_truncated_json_is_malformed_and_keeps_raw_text():
    truncated = PAYLOAD[: len(PAYLOAD) // 2]

    with pytest.raises(ResponseDecodeError) as excinfo:
        decode_response(truncated)

    assert excinfo.value.reason == MALFORMED_PAYLOAD
    assert excinfo.value.raw_text == truncated


def test_non_object_payload_is_malformed():
    with pytest.raises(ResponseDecodeError) as excinfo:
        decode_response("42")

    assert excinfo.value.reason == MALFORMED_PAYLOAD


def test_missing_classes_field_is_empty():
    payload = decode_response('{"rawText": "nothing legible"}')

    assert payload.classes == ()
    assert payload.raw_text == "nothing legible"


def test_bare_array_is_taken_as_classes():
    payload = decode_response('[{"day": "Monday", "time": "7 PM", "className": "FIT", "trainer": "Anmol"}]')

    assert len(payload.classes) == 1
    assert payload.raw_text == ""


def test_strip_code_fence_leaves_plain_text_alone():
    assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'
