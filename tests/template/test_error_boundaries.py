"""
Границы ошибок: неизвестные и некорректные теги не прерывают проход.
"""

import logging
import time

import pytest

from lq.config import EngineConfig
from lq.filters import create_filter_registry
from lq.scope import Scope
from lq.template import RenderContext, create_template_processor
from lq.template.control import ControlFlowPlugin
from lq.template.markup.nodes import UnknownTagNode
from lq.template.registry import TemplateRegistry
from tests.infrastructure import render


class TestUnknownTags:

    def test_unknown_tag_renders_nothing(self):
        assert render("a{% frobnicate x %}b") == "ab"

    def test_unknown_tag_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            render("{% frobnicate %}")
        assert "frobnicate" in caplog.text

    def test_unclosed_block_does_not_stop_rendering(self):
        assert render("a{% if true %}b{{ 'c' }}") == "abc"

    def test_deeply_nested_unclosed_blocks_parse_quickly(self):
        started = time.perf_counter()
        output = render("{% if true %}x" * 30)
        assert time.perf_counter() - started < 5
        assert output == "x" * 30

    def test_stray_end_tag(self):
        assert render("a{% endif %}b") == "ab"

    def test_unterminated_output_is_text(self):
        assert render("a {{ b") == "a {{ b"


class TestNodeErrors:

    def test_undefined_variables_are_nil(self):
        assert render("[{{ a.b.c }}]") == "[]"

    def test_unknown_filter_passes_value(self):
        assert render("{{ 'x' | nosuchfilter }}") == "x"

    def test_break_outside_loop_ends_template(self):
        assert render("a{% break %}b") == "a"

    def test_failing_node_becomes_diagnostic(self):
        processor = create_template_processor(create_filter_registry(EngineConfig()))
        ctx = RenderContext(scope=Scope(), template_name="t")
        # Без обработчика темы render падает, соседние узлы остаются
        output = processor.render_text("a{% render 'x' %}b", ctx)
        assert output.startswith("a<!-- Snippet Error: x:")
        assert output.endswith("b")


class TestTagTable:

    @staticmethod
    def _unknown_node(text):
        processor = create_template_processor(create_filter_registry(EngineConfig()))
        nodes = [n for n in processor.parse_source(text, "t") if isinstance(n, UnknownTagNode)]
        assert len(nodes) == 1
        return nodes[0]

    def test_unknown_tag_reason(self):
        assert self._unknown_node("{% frobnicate %}").reason == "Unknown tag 'frobnicate'"

    def test_malformed_known_tag_reason(self):
        assert self._unknown_node("{% increment %}").reason.startswith("Malformed 'increment' tag")

    def test_stray_end_tag_reason(self):
        assert self._unknown_node("{% endfor %}").reason == "Unexpected 'endfor'"

    def test_tag_names_are_owned_by_one_plugin(self):
        registry = TemplateRegistry()
        registry.register_plugin(ControlFlowPlugin())
        assert registry.tag_owner("for") == "control"

        class Conflicting(ControlFlowPlugin):
            @property
            def name(self):
                return "conflicting"

        with pytest.raises(ValueError, match="already provided by 'control'"):
            registry.register_plugin(Conflicting())
        assert [p.name for p in registry.plugins] == ["control"]


class TestParseCache:

    def test_same_text_reuses_ast(self):
        processor = create_template_processor(create_filter_registry(EngineConfig()))
        assert processor.parse_source("a{{ b }}", "t") is processor.parse_source("a{{ b }}", "t")

    def test_changed_text_replaces_cached_version(self):
        processor = create_template_processor(create_filter_registry(EngineConfig()))
        first = processor.parse_source("a", "t")
        processor.parse_source("b", "t")
        again = processor.parse_source("a", "t")
        assert again is not first
        assert again == first
