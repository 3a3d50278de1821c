"""
JSON с комментариями.
"""

import json

import pytest

from lq.theme import load_jsonc, strip_json_comments


class TestJsonc:

    def test_comments_are_removed(self):
        text = '/*\n header\n*/\n{"a": 1, // line\n "b": /* inline */ 2}'
        assert load_jsonc(text) == {"a": 1, "b": 2}

    def test_markers_inside_strings_are_kept(self):
        assert load_jsonc('{"url": "https://x.com/*y*/", "c": "// no"}') == {"url": "https://x.com/*y*/", "c": "// no"}

    def test_trailing_commas(self):
        assert load_jsonc('{"a": [1, 2,], "b": ",]",}') == {"a": [1, 2], "b": ",]"}

    def test_line_structure_is_kept(self):
        assert strip_json_comments("/* a\nb */x").count("\n") == 1

    def test_bom(self):
        assert load_jsonc('﻿{"a": 1}') == {"a": 1}

    def test_invalid_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            load_jsonc("{ nope")
