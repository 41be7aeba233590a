import json

from messages_relay.conversion.payload import PayloadView, inspect_payload


def _body(**fields) -> bytes:
    return json.dumps(fields).encode("utf-8")


class TestInspectPayload:
    def test_extracts_model_and_stream(self):
        view = inspect_payload(_body(model="claude-sonnet-4-20250514", stream=True, messages=[]))
        assert view.model == "claude-sonnet-4-20250514"
        assert view.stream is True
        assert view.has_metadata is False
        assert view.parsed

    def test_stream_defaults_to_false(self):
        assert inspect_payload(_body(model="m")).stream is False

    def test_stream_must_be_boolean_true(self):
        assert inspect_payload(_body(stream="true")).stream is False
        assert inspect_payload(_body(stream=1)).stream is False
        assert inspect_payload(_body(stream=False)).stream is False

    def test_non_string_model_is_unset(self):
        assert inspect_payload(_body(model=42)).model is None

    def test_metadata_presence(self):
        assert inspect_payload(_body(metadata={"user_id": "u"})).has_metadata is True
        assert inspect_payload(_body(metadata=None)).has_metadata is True

    def test_malformed_json_yields_empty_view(self, caplog):
        view = inspect_payload(b'{"model": "claude-3-5-haiku", ')
        assert view == PayloadView()
        assert not view.parsed
        assert "Failed to parse request body JSON" in caplog.text

    def test_empty_body_yields_empty_view(self):
        assert inspect_payload(b"") == PayloadView()

    def test_invalid_utf8_yields_empty_view(self):
        assert inspect_payload(b"\xff\xfe\x00") == PayloadView()

    def test_non_object_json_yields_empty_view(self):
        assert inspect_payload(b'["model", "stream"]') == PayloadView()
        assert inspect_payload(b"null") == PayloadView()

    def test_keeps_parsed_object(self):
        view = inspect_payload(_body(model="m", messages=[{"role": "user", "content": "hi"}]))
        assert view.data == {"model": "m", "messages": [{"role": "user", "content": "hi"}]}

    def test_deeply_nested_json_yields_empty_view(self):
        depth = 100_000
        raw = b'{"model": "claude-sonnet-4", "x": ' + b"[" * depth + b"]" * depth + b"}"
        assert inspect_payload(raw) == PayloadView()

    def test_non_finite_number_literals_are_malformed(self):
        for token in (b"NaN", b"Infinity", b"-Infinity"):
            assert inspect_payload(b'{"model": "m", "temperature": ' + token + b"}") == PayloadView()
