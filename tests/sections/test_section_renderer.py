"""
Рендеринг секций: объект section, блоки, изоляция и диагностика.
"""

import pytest

from lq.sections import SectionSchema, build_blocks, build_section_object
from tests.infrastructure import make_engine, section_source

SCHEMA = {
    "name": "List",
    "settings": [{"type": "text", "id": "title", "default": "Items"}],
    "blocks": [{"type": "item", "settings": [{"type": "text", "id": "label", "default": "?"}]}],
}

BODY = (
    "<h2>{{ section.settings.title }}</h2>"
    "{% for block in section.blocks %}<p {{ block.shopify_attributes }}>{{ block.settings.label }}</p>{% endfor %}"
)


@pytest.fixture
def engine():
    return make_engine({
        "sections/list.liquid": section_source(BODY, SCHEMA),
        "sections/scoped.liquid": "[{{ outer }}|{{ section.id }}|{{ block }}]",
        "sections/broken.liquid": "{% schema %}{ nope{% endschema %}<p>{{ section.settings.title | default: 'none' }}</p>",
    })


class TestSectionObject:

    def test_defaults_and_overrides(self):
        schema = SectionSchema.from_dict(SCHEMA)
        section = build_section_object("list", schema, {"settings": {"extra": 1}})
        assert section["id"] == "section-list"
        assert section["settings"] == {"title": "Items", "extra": 1}
        assert section["blocks"] == []
        assert section["block_order"] == []

    def test_blocks_follow_block_order(self):
        schema = SectionSchema.from_dict(SCHEMA)
        instance = {
            "blocks": {
                "a": {"type": "item", "settings": {"label": "A"}},
                "b": {"type": "item"},
                "c": {"type": "item", "disabled": True},
            },
            "block_order": ["b", "ghost", "a", "c"],
        }
        blocks = build_blocks(schema, instance)
        assert [block["id"] for block in blocks] == ["b", "a"]
        assert blocks[0]["settings"] == {"label": "?"}
        assert blocks[1]["shopify_attributes"] == 'data-block-id="a"'

    def test_missing_block_order_uses_key_order(self):
        schema = SectionSchema.from_dict(SCHEMA)
        blocks = build_blocks(schema, {"blocks": {"x": {"type": "item"}, "y": {"type": "item"}}})
        assert [block["id"] for block in blocks] == ["x", "y"]


class TestSectionRendering:

    def test_render_with_blocks(self, engine):
        html = engine.render_section("list", {
            "settings": {"title": "Mine"},
            "blocks": {"b1": {"type": "item", "settings": {"label": "One"}}},
            "block_order": ["b1"],
        })
        assert html.startswith('<h2>Mine</h2><p data-block-id="b1">One</p>')

    def test_defaults_without_instance(self, engine):
        assert engine.render_section("list").startswith("<h2>Items</h2>")

    def test_disabled_section_renders_nothing(self, engine):
        assert engine.render_section("list", {"disabled": True}) == ""

    def test_missing_section(self, engine):
        assert engine.render_section("nope") == "<!-- Section not found: nope -->"

    def test_invalid_name(self, engine):
        assert engine.render_section("..") == "<!-- Invalid section name -->"

    def test_scope_is_isolated(self, engine):
        ctx = engine.new_context(variables={"outer": "leak"})
        html = engine.sections.render("scoped", {"id": "p1"}, ctx)
        assert html == "[|p1|]"

    def test_malformed_schema_still_renders(self, engine):
        assert engine.render_section("broken").startswith("<p>none</p>")
