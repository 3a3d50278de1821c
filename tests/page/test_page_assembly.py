"""
Сборка страниц из JSON-документов шаблонов.
"""

import json

import pytest

from lq.errors import DocumentError
from tests.infrastructure import make_engine, section_source, template_document


class TestJsonTemplates:

    def test_end_to_end(self, engine):
        html = engine.render_page("index")
        assert html.startswith("<html><head>")
        assert '<div id="shopify-section-s1" class="shopify-section"><h1>Hi</h1>' in html
        assert html.endswith("</body></html>")

    def test_default_setting_when_not_overridden(self, theme_files):
        theme_files["templates/index.json"] = template_document({"s1": {"type": "hero"}})
        assert "<h1>Welcome</h1>" in make_engine(theme_files).render_page("index")

    def test_content_for_header(self, engine):
        html = engine.render_page("index")
        assert "<title>Home - My Store</title>" in html
        assert '<meta charset="utf-8">' in html

    def test_section_ids_follow_order(self, theme_files):
        theme_files["templates/index.json"] = template_document(
            {"a": {"type": "hero"}, "b": {"type": "hero"}, "c": {"type": "hero"}},
            ["c", "ghost", "a"],
        )
        document = make_engine(theme_files).render_document("index")
        assert document.section_ids == ["c", "a"]
        assert document.template_name == "index"
        assert document.html.index("shopify-section-c") < document.html.index("shopify-section-a")
        assert "shopify-section-b" not in document.html

    def test_missing_order_uses_section_keys(self, theme_files):
        theme_files["templates/index.json"] = json.dumps({"sections": {"x": {"type": "hero"}, "y": {"type": "hero"}}})
        assert make_engine(theme_files).render_document("index").section_ids == ["x", "y"]

    def test_broken_section_does_not_affect_others(self, theme_files):
        theme_files["templates/index.json"] = template_document({
            "bad": {"settings": {}},
            "gone": {"type": "nope"},
            "good": {"type": "hero"},
        })
        document = make_engine(theme_files).render_document("index")
        assert "<!-- Section type missing: bad -->" in document.html
        assert "<!-- Section not found: nope -->" in document.html
        assert "<h1>Welcome</h1>" in document.html
        assert document.section_ids == ["bad", "gone", "good"]

    def test_disabled_section_is_wrapped_empty(self, theme_files):
        theme_files["templates/index.json"] = template_document({"s1": {"type": "hero", "disabled": True}})
        html = make_engine(theme_files).render_page("index")
        assert '<div id="shopify-section-s1" class="shopify-section"></div>' in html

    def test_layout_false(self, theme_files):
        theme_files["templates/index.json"] = template_document({"s1": {"type": "hero"}}, layout=False)
        html = make_engine(theme_files).render_page("index")
        assert html.startswith('<div id="shopify-section-s1"')
        assert "<html>" not in html

    def test_alternate_layout(self, theme_files):
        theme_files["layout/password.liquid"] = "<main>{{ content_for_layout }}</main>"
        theme_files["templates/index.json"] = template_document({"s1": {"type": "hero"}}, layout="password")
        assert make_engine(theme_files).render_page("index").startswith("<main><div")

    def test_missing_layout_returns_sections(self, theme_files):
        del theme_files["layout/theme.liquid"]
        assert make_engine(theme_files).render_page("index").startswith('<div id="shopify-section-s1"')

    def test_template_global(self, theme_files):
        theme_files["sections/hero.liquid"] = section_source("{{ template.name }}|{{ template.suffix }}")
        theme_files["templates/product.alternate.json"] = template_document({"s": {"type": "hero"}})
        html = make_engine(theme_files).render_page("product.alternate")
        assert "product|alternate" in html


class TestBrokenDocuments:

    def test_json_error_placeholder(self, theme_files):
        theme_files["templates/index.json"] = "{ not json"
        html = make_engine(theme_files).render_page("index")
        assert html.startswith("<!-- Template JSON parse error: index:")

    def test_strict_mode_raises(self, theme_files):
        theme_files["templates/index.json"] = "{ not json"
        with pytest.raises(DocumentError) as exc_info:
            make_engine(theme_files).render_page("index", strict=True)
        assert exc_info.value.template_name == "index"

    def test_non_object_document(self, theme_files):
        theme_files["templates/index.json"] = "[]"
        with pytest.raises(DocumentError):
            make_engine(theme_files).render_page("index", strict=True)

    def test_json_with_comments_is_accepted(self, theme_files):
        theme_files["templates/index.json"] = (
            '/* generated */\n{"sections": {"s1": {"type": "hero"}}, "order": ["s1"],}'
        )
        assert "<h1>Welcome</h1>" in make_engine(theme_files).render_page("index")


class TestLiquidTemplates:

    def test_bare_template_with_layout(self, theme_files):
        theme_files["templates/page.liquid"] = "<p>{{ template.name }}</p>"
        html = make_engine(theme_files).render_page("page")
        assert "<body><p>page</p></body>" in html

    def test_layout_none(self, theme_files):
        theme_files["templates/page.liquid"] = "{% layout none %}<p>bare</p>"
        assert make_engine(theme_files).render_page("page") == "<p>bare</p>"

    def test_customers_subdirectory(self, theme_files):
        theme_files["templates/customers/login.liquid"] = "{% layout none %}login"
        assert make_engine(theme_files).render_page("customers/login") == "login"

    def test_missing_template(self, engine):
        assert engine.render_page("nope") == "<!-- Template not found: nope -->"

    def test_invalid_template_name(self, engine):
        assert engine.render_page("..") == "<!-- Invalid template name -->"
