"""
Фильтры кодирования и хеширования.
"""

import hashlib
import hmac


class TestEncodingFilters:

    def test_url_encode_decode(self, apply):
        assert apply("url_encode", "a b&c") == "a+b%26c"
        assert apply("url_decode", "a+b%26c") == "a b&c"

    def test_url_escape_keeps_reserved(self, apply):
        assert apply("url_escape", "/path?q=a b") == "/path?q=a%20b"
        assert apply("url_param_escape", "a&b") == "a%26b"

    def test_base64(self, apply):
        assert apply("base64_encode", "hello") == "aGVsbG8="
        assert apply("base64_decode", "aGVsbG8=") == "hello"
        assert apply("base64_url_safe_encode", "??>") == "Pz8-"
        assert apply("base64_url_safe_decode", "Pz8-") == "??>"

    def test_digests(self, apply):
        assert apply("md5", "abc") == "900150983cd24fb0d6963f7d28e17f72"
        assert apply("sha1", "abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"
        assert apply("sha256", "abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_hmac(self, apply):
        expected = hmac.new(b"key", b"abc", hashlib.sha256).hexdigest()
        assert apply("hmac_sha256", "abc", "key") == expected
        assert apply("hmac_sha1", "abc", "key") == hmac.new(b"key", b"abc", hashlib.sha1).hexdigest()
