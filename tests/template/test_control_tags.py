"""
Управляющие теги: условия, case, циклы, assign, liquid, raw, comment.
"""

import pytest

from tests.infrastructure import render


class TestConditions:

    @pytest.mark.parametrize("template,expected", [
        ("{% if x %}yes{% endif %}", "yes"),
        ("{% if missing %}yes{% else %}no{% endif %}", "no"),
        ("{% if x == 2 %}a{% elsif x == 1 %}b{% else %}c{% endif %}", "b"),
        ("{% unless x == 1 %}a{% else %}b{% endunless %}", "b"),
        ("{% if 0 %}zero is truthy{% endif %}", "zero is truthy"),
        ("{% if '' == empty %}empty{% endif %}", "empty"),
        ("{% if list contains 'b' %}has{% endif %}", "has"),
    ])
    def test_branches(self, template, expected):
        assert render(template, {"x": 1, "list": ["a", "b"]}) == expected

    def test_case(self):
        template = "{% case v %}{% when 'a', 'b' %}ab{% when 'c' or 'd' %}cd{% else %}other{% endcase %}"
        assert render(template, {"v": "b"}) == "ab"
        assert render(template, {"v": "d"}) == "cd"
        assert render(template, {"v": "z"}) == "other"

    def test_case_ignores_text_before_first_when(self):
        assert render("{% case 1 %}junk{% when 1 %}one{% endcase %}") == "one"


class TestForLoops:

    def test_basic_iteration(self):
        assert render("{% for i in items %}{{ i }},{% endfor %}", {"items": [1, 2, 3]}) == "1,2,3,"

    def test_range(self):
        assert render("{% for i in (1..3) %}{{ i }}{% endfor %}") == "123"

    def test_else_for_empty_collection(self):
        assert render("{% for i in items %}x{% else %}none{% endfor %}", {"items": []}) == "none"
        assert render("{% for i in missing %}x{% else %}none{% endfor %}") == "none"

    def test_limit_offset_reversed(self):
        items = {"items": [1, 2, 3, 4, 5]}
        assert render("{% for i in items limit: 2 offset: 1 %}{{ i }}{% endfor %}", items) == "23"
        assert render("{% for i in items reversed %}{{ i }}{% endfor %}", items) == "54321"

    def test_forloop_object(self):
        template = (
            "{% for i in items %}"
            "{{ forloop.index }}/{{ forloop.index0 }}/{{ forloop.rindex }}"
            "{% if forloop.first %}F{% endif %}{% if forloop.last %}L{% endif %} "
            "{% endfor %}"
        )
        assert render(template, {"items": ["a", "b"]}) == "1/0/2F 2/1/1L "

    def test_parentloop(self):
        template = "{% for a in (1..2) %}{% for b in (1..2) %}{{ forloop.parentloop.index }}{% endfor %}{% endfor %}"
        assert render(template) == "1122"

    def test_break_keeps_output_before_it(self):
        template = "{% for i in (1..5) %}{{ i }}{% if i == 3 %}{% break %}{% endif %}-{% endfor %}"
        assert render(template) == "1-2-3"

    def test_continue(self):
        template = "{% for i in (1..4) %}{% if i == 2 %}{% continue %}{% endif %}{{ i }}{% endfor %}"
        assert render(template) == "134"

    def test_dict_iterates_as_pairs(self):
        assert render("{% for p in d %}{{ p[0] }}={{ p[1] }};{% endfor %}", {"d": {"a": 1}}) == "a=1;"

    def test_loop_variable_does_not_leak(self):
        assert render("{% for i in (1..2) %}{% endfor %}[{{ i }}]") == "[]"


class TestAssignment:

    def test_assign_with_filters(self):
        assert render("{% assign t = 'abc' | upcase %}{{ t }}") == "ABC"

    def test_assign_in_loop_survives_loop(self):
        template = "{% for i in (1..3) %}{% assign last = i %}{% endfor %}{{ last }}"
        assert render(template) == "3"

    def test_assign_in_if_is_visible(self):
        assert render("{% if true %}{% assign v = 1 %}{% endif %}{{ v }}") == "1"

    def test_echo(self):
        assert render("{% echo 'x' | append: 'y' %}") == "xy"


class TestLiquidTag:

    def test_multiline_statements(self):
        template = """{% liquid
            assign n = 2
            if n == 2
              echo 'two'
            endif
        %}"""
        assert render(template) == "two"


class TestRawAndComment:

    def test_raw_keeps_markup(self):
        assert render("{% raw %}{{ x }}{% if %}{% endraw %}") == "{{ x }}{% if %}"

    def test_raw_in_raw_closes_on_matching_end(self):
        assert render("{% raw %}{% raw %}x{% endraw %}{% endraw %}") == "{% raw %}x{% endraw %}"

    def test_comment_is_dropped(self):
        assert render("a{% comment %}{{ x }}{% comment %}nested{% endcomment %}{% endcomment %}b") == "ab"

    def test_inline_comment(self):
        assert render("a{% # note %}b") == "ab"


class TestWhitespaceControl:

    def test_tag_trimming(self):
        assert render("a  {%- if true -%}  b  {%- endif -%}  c") == "abc"

    def test_output_trimming(self):
        assert render("[ {{- 'x' -}} ]") == "[x]"

    def test_without_dash_whitespace_is_kept(self):
        assert render("a {% if true %} b {% endif %} c") == "a  b  c"
