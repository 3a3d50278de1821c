"""
Строковые фильтры: приведение к строке и граничные случаи.
"""

from decimal import Decimal

import pytest


class TestStringFilters:

    @pytest.mark.parametrize("name,value,args,expected", [
        ("append", "a", ("b",), "ab"),
        ("prepend", "a", ("b",), "ba"),
        ("remove", "banana", ("an",), "ba"),
        ("remove_first", "banana", ("an",), "bana"),
        ("remove_last", "banana", ("an",), "bana"),
        ("replace", "a-b-c", ("-", "+"), "a+b+c"),
        ("replace_first", "a-b-c", ("-", "+"), "a+b-c"),
        ("replace_last", "a-b-c", ("-", "+"), "a-b+c"),
        ("strip", "  x  ", (), "x"),
        ("lstrip", "  x  ", (), "x  "),
        ("rstrip", "  x  ", (), "  x"),
        ("upcase", "abc", (), "ABC"),
        ("downcase", "ABC", (), "abc"),
        ("capitalize", "hello world", (), "Hello world"),
        ("strip_newlines", "a\nb\r\nc", (), "abc"),
        ("newline_to_br", "a\nb", (), "a<br />\nb"),
    ])
    def test_basic(self, apply, name, value, args, expected):
        assert apply(name, value, *args) == expected

    def test_non_string_input_is_stringified(self, apply):
        assert apply("upcase", 12) == "12"
        assert apply("append", None, "x") == "x"
        assert apply("upcase", True) == "TRUE"

    def test_strip_html(self, apply):
        assert apply("strip_html", "<p>Hi <b>there</b></p><script>x()</script>") == "Hi there"

    def test_escape(self, apply):
        assert apply("escape", '<a href="x">') == "&lt;a href=&quot;x&quot;&gt;"
        assert apply("escape_once", "&lt;b&gt; <i>") == "&lt;b&gt; &lt;i&gt;"

    def test_truncate_counts_ellipsis(self, apply):
        assert apply("truncate", "Ground control to Major Tom.", 20) == "Ground control to..."
        assert apply("truncate", "short", 20) == "short"
        assert apply("truncate", "abcdef", 4, "") == "abcd"

    def test_truncatewords(self, apply):
        assert apply("truncatewords", "one two three four", 2) == "one two..."
        assert apply("truncatewords", "one two", 5) == "one two"

    def test_split(self, apply):
        assert apply("split", "a,b,c", ",") == ["a", "b", "c"]
        assert apply("split", "a b  c", " ") == ["a", "b", "c"]
        assert apply("split", "", ",") == []

    def test_slice(self, apply):
        assert apply("slice", "Liquid", 0) == "L"
        assert apply("slice", "Liquid", 2, 5) == "quid"
        assert apply("slice", "Liquid", -3, 2) == "ui"
        assert apply("slice", [1, 2, 3], 1, 2) == [2, 3]

    def test_handleize(self, apply):
        assert apply("handleize", "Hello, World!") == "hello-world"
        assert apply("handle", "  Big  Sale 2024 ") == "big-sale-2024"

    def test_camelize(self, apply):
        assert apply("camelize", "main-menu_item") == "MainMenuItem"

    def test_pluralize(self, apply):
        assert apply("pluralize", 1, "item", "items") == "item"
        assert apply("pluralize", 3, "item", "items") == "items"

    def test_size(self, apply):
        assert apply("size", "abc") == 3
        assert apply("size", [1, 2]) == 2
        assert apply("size", None) == 0

    def test_default(self, apply):
        assert apply("default", None, "x") == "x"
        assert apply("default", "", "x") == "x"
        assert apply("default", [], "x") == "x"
        assert apply("default", False, "x") == "x"
        assert apply("default", False, "x", allow_false=True) is False
        assert apply("default", 0, "x") == 0

    def test_json(self, apply):
        assert apply("json", {"a": [1, "b"]}) == '{"a": [1, "b"]}'
        assert apply("json", "é") == '"é"'
        assert apply("json", [Decimal("2"), Decimal("2.5")]) == "[2, 2.5]"
