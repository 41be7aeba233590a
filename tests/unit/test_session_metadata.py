import json
import re

from messages_relay.conversion.session_metadata import augment_metadata, build_session_user_id

USER_ID_PATTERN = re.compile(
    r"^user_(?P<user>.+)_account__session_"
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)

RAW = b'{"model": "claude-sonnet-4", "messages": [{"role": "user", "content": "caf\xc3\xa9"}]}'


def _data() -> dict:
    return json.loads(RAW)


class TestBuildSessionUserId:
    def test_shape(self):
        user_id = build_session_user_id("abc123")
        match = USER_ID_PATTERN.match(user_id)
        assert match is not None
        assert match.group("user") == "abc123"

    def test_explicit_session(self):
        assert build_session_user_id("u", "s-1") == "user_u_account__session_s-1"

    def test_sessions_are_unique(self):
        assert build_session_user_id("u") != build_session_user_id("u")


class TestAugmentMetadata:
    def test_injects_user_id(self):
        body = augment_metadata(_data(), RAW, has_metadata=False, default_user_id="abc123")
        forwarded = json.loads(body)

        assert USER_ID_PATTERN.match(forwarded["metadata"]["user_id"])
        del forwarded["metadata"]
        assert forwarded == _data()

    def test_reserialized_body_is_compact_utf8(self):
        body = augment_metadata(_data(), RAW, has_metadata=False, default_user_id="u")
        assert b'"model":"claude-sonnet-4"' in body
        assert "café".encode("utf-8") in body

    def test_does_not_mutate_parsed_data(self):
        data = _data()
        augment_metadata(data, RAW, has_metadata=False, default_user_id="u")
        assert "metadata" not in data

    def test_existing_metadata_keeps_original_bytes(self):
        raw = b'{"model":"m",  "metadata": {"user_id": "mine"}}'
        assert augment_metadata(json.loads(raw), raw, has_metadata=True, default_user_id="u") is raw

    def test_no_default_user_keeps_original_bytes(self):
        assert augment_metadata(_data(), RAW, has_metadata=False, default_user_id="") is RAW

    def test_unparsed_body_keeps_original_bytes(self):
        raw = b"not json at all"
        assert augment_metadata(None, raw, has_metadata=False, default_user_id="u") is raw
