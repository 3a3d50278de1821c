"""
Реестр фильтров, URL/медиа фильтры и фильтр перевода.
"""

from lq.config import EngineConfig
from lq.filters import FilterRegistry, create_filter_registry


class TestFilterRegistry:

    def test_unknown_filter_passes_value(self, filters):
        assert filters.apply("nope", "value", [], {}) == "value"

    def test_failing_filter_passes_value(self):
        registry = FilterRegistry()

        def boom(value):
            raise TypeError("bad input")

        registry.register("boom", boom)
        assert registry.apply("boom", 7, [], {}) == 7

    def test_names_cover_families(self, filters):
        names = set(filters.names())
        for name in ("upcase", "money", "sort", "date", "color_to_rgb", "asset_url", "t", "translate"):
            assert name in names

    def test_translate_without_translator_returns_key(self, filters):
        assert filters.apply("t", "general.title", [], {}) == "general.title"

    def test_translate_passes_substitutions(self):
        calls = []

        def translator(key, subs):
            calls.append((key, subs))
            return f"{key}!"

        registry = create_filter_registry(EngineConfig(), translator)
        assert registry.apply("t", "cart.count", [], {"count": 2}) == "cart.count!"
        assert calls == [("cart.count", {"count": 2})]


class TestUrlFilters:

    def test_asset_prefixes_come_from_config(self):
        registry = create_filter_registry(EngineConfig(asset_url_prefix="/a/", file_url_prefix="/f/"))
        assert registry.apply("asset_url", "base.css", [], {}) == "/a/base.css"
        assert registry.apply("file_url", "doc.pdf", [], {}) == "/f/doc.pdf"

    def test_tags(self, apply):
        assert apply("stylesheet_tag", "/a.css") == '<link rel="stylesheet" href="/a.css" type="text/css">'
        assert apply("script_tag", "/a.js") == '<script src="/a.js"></script>'

    def test_link_to(self, apply):
        assert apply("link_to", "Home", "/", **{"class": "nav"}) == '<a href="/" class="nav">Home</a>'

    def test_url_of_object(self, apply):
        assert apply("url", {"url": "/products/x"}) == "/products/x"
        assert apply("url", "/already") == "/already"


class TestDateFilter:

    def test_iso_date(self, apply):
        assert apply("date", "2024-03-05T10:20:00Z", "%Y-%m-%d") == "2024-03-05"

    def test_not_a_date_passes_through(self, apply):
        assert apply("date", "someday", "%Y") == "someday"

    def test_now_is_formatted(self, apply):
        assert len(apply("date", "now", "%Y")) == 4
