"""
Группы секций в макете.
"""

import json

from tests.infrastructure import make_engine


def _group(sections, order, group_type="header"):
    return json.dumps({"type": group_type, "name": group_type.title(), "sections": sections, "order": order})


class TestSectionGroups:

    def test_group_in_layout(self, theme_files):
        theme_files["layout/theme.liquid"] = "{% sections 'header-group' %}{{ content_for_layout }}"
        theme_files["sections/header-group.json"] = _group({"h1": {"type": "hero", "settings": {"heading": "Top"}}}, ["h1"])
        html = make_engine(theme_files).render_page("index")
        assert html.index("<h1>Top</h1>") < html.index("<h1>Hi</h1>")
        assert 'id="shopify-section-h1" class="shopify-section shopify-section-group-header-group"' in html

    def test_group_order(self, theme_files):
        theme_files["layout/theme.liquid"] = "{% sections 'footer-group' %}"
        theme_files["sections/footer-group.json"] = _group(
            {"a": {"type": "hero", "settings": {"heading": "A"}}, "b": {"type": "hero", "settings": {"heading": "B"}}},
            ["b", "a"],
            "footer",
        )
        html = make_engine(theme_files).render_page("index")
        assert html.index("<h1>B</h1>") < html.index("<h1>A</h1>")

    def test_broken_group_is_a_diagnostic(self, theme_files):
        theme_files["layout/theme.liquid"] = "[{% sections 'bad-group' %}]{{ content_for_layout }}"
        theme_files["sections/bad-group.json"] = "{ broken"
        html = make_engine(theme_files).render_page("index")
        assert html.startswith("[<!-- Section Group Error: bad-group:")
        assert "<h1>Hi</h1>" in html
