"""Tests for api_sig computation."""

import hashlib
import re

from lastfm_scrobble.signature import md5_digest, sign, signing_string


class TestSigningString:
    def test_sorted_concatenation_with_secret(self):
        s = signing_string({"api_key": "key", "username": "u"}, "auth.getMobileSession", "secret")
        assert s == "api_keykeymethodauth.getMobileSessionusernameusecret"

    def test_empty_params_signs_method_only(self):
        assert signing_string({}, "track.scrobble", "secret") == "methodtrack.scrobblesecret"

    def test_no_escaping_of_values(self):
        s = signing_string({"a": "b=c&d"}, "m", "s")
        assert s == "ab=c&dmethodms"

    def test_does_not_mutate_input(self):
        params = {"api_key": "key"}
        signing_string(params, "m", "s")
        assert params == {"api_key": "key"}

    def test_byte_order_puts_uppercase_first(self):
        s = signing_string({"b": "1", "B": "2", "a": "3"}, "m", "")
        assert s == "B2a3b1methodm"


class TestSign:
    def test_matches_md5_of_signing_string(self):
        expected = hashlib.md5(
            b"api_keykeymethodauth.getMobileSessionusernameusecret").hexdigest()
        assert sign({"api_key": "key", "username": "u"}, "auth.getMobileSession", "secret") == expected

    def test_is_32_lowercase_hex(self):
        sig = sign({"api_key": "key", "username": "u"}, "auth.getMobileSession", "secret")
        assert re.fullmatch(r"[0-9a-f]{32}", sig)

    def test_deterministic(self):
        params = {"api_key": "key", "username": "u"}
        assert sign(params, "auth.getMobileSession", "secret") == \
            sign(dict(params), "auth.getMobileSession", "secret")

    def test_insertion_order_independent(self):
        a = {"artist": "A", "track": "T", "album": "X", "sk": "s"}
        b = {"sk": "s", "album": "X", "track": "T", "artist": "A"}
        assert sign(a, "track.scrobble", "secret") == sign(b, "track.scrobble", "secret")

    def test_single_character_change_changes_signature(self):
        base = sign({"track": "Song"}, "track.scrobble", "secret")
        assert sign({"track": "Sonh"}, "track.scrobble", "secret") != base
        assert sign({"track": "Song"}, "track.scrobble", "secreu") != base
        assert sign({"track": "Song"}, "track.scrobbles", "secret") != base

    def test_unicode_is_utf8_encoded(self):
        expected = hashlib.md5("artistBjörkmethodms".encode("utf-8")).hexdigest()
        assert sign({"artist": "Björk"}, "m", "s") == expected

    def test_custom_digest(self):
        seen = []

        def digest(data):
            seen.append(data)
            return b"\x00" * 15 + b"\xff"

        assert sign({"k": "v"}, "m", "s", digest=digest) == "00" * 15 + "ff"
        assert seen == [b"kvmethodms"]

    def test_md5_digest_is_16_bytes(self):
        assert md5_digest(b"") == bytes.fromhex("d41d8cd98f00b204e9800998ecf8427e")
