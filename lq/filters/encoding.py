"""
Encoding, hashing and URL-escaping filters.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from typing import Dict
from urllib.parse import quote, quote_plus, unquote_plus

from .registry import FilterFunc
from ..values import Value, to_str


def url_encode(value: Value) -> str:
    return quote_plus(to_str(value))


def url_decode(value: Value) -> str:
    return unquote_plus(to_str(value))


def url_escape(value: Value) -> str:
    # Reserved URL characters stay intact, only unsafe ones are escaped
    return quote(to_str(value), safe="/:?#[]@!$&'()*+,;=-._~%")


def url_param_escape(value: Value) -> str:
    return quote(to_str(value), safe="-._~")


def base64_encode(value: Value) -> str:
    return base64.b64encode(to_str(value).encode("utf-8")).decode("ascii")


def base64_decode(value: Value) -> str:
    text = to_str(value)
    try:
        return base64.b64decode(text, validate=False).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return text


def base64_url_safe_encode(value: Value) -> str:
    encoded = base64.urlsafe_b64encode(to_str(value).encode("utf-8")).decode("ascii")
    return encoded.rstrip("=")


def base64_url_safe_decode(value: Value) -> str:
    text = to_str(value)
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return text


def _digest(algorithm: str) -> FilterFunc:
    def digest(value: Value) -> str:
        return hashlib.new(algorithm, to_str(value).encode("utf-8")).hexdigest()
    return digest


def _hmac(algorithm: str) -> FilterFunc:
    def sign(value: Value, secret: Value = "") -> str:
        key = to_str(secret).encode("utf-8")
        return hmac.new(key, to_str(value).encode("utf-8"), algorithm).hexdigest()
    return sign


FILTERS: Dict[str, FilterFunc] = {
    "url_encode": url_encode,
    "url_decode": url_decode,
    "url_escape": url_escape,
    "url_param_escape": url_param_escape,
    "base64_encode": base64_encode,
    "base64_decode": base64_decode,
    "base64_url_safe_encode": base64_url_safe_encode,
    "base64_url_safe_decode": base64_url_safe_decode,
    "md5": _digest("md5"),
    "sha1": _digest("sha1"),
    "sha256": _digest("sha256"),
    "hmac_sha1": _hmac("sha1"),
    "hmac_sha256": _hmac("sha256"),
}


__all__ = ["FILTERS"]
