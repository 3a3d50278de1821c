"""
render и include: изоляция областей видимости и диагностика сниппетов.
"""

from lq.config import EngineConfig
from tests.infrastructure import make_engine, render

PAIR = {"snippets/pair.liquid": "[{{ x }}|{{ y }}]"}


class TestScopeIsolation:

    def test_render_sees_only_arguments(self):
        assert render("{% assign y = 2 %}{% render 'pair', x: 1 %}", files=PAIR) == "[1|]"

    def test_include_sees_caller_variables(self):
        assert render("{% assign y = 2 %}{% include 'pair', x: 1 %}", files=PAIR) == "[1|2]"

    def test_render_sees_globals(self):
        files = {"snippets/shop.liquid": "{{ shop.name }}"}
        assert render("{% render 'shop' %}", files=files) == "My Store"

    def test_assign_inside_render_stays_inside(self):
        files = {"snippets/a.liquid": "{% assign z = 1 %}"}
        assert render("{% render 'a' %}[{{ z }}]", files=files) == "[]"

    def test_capture_inside_render_is_visible_to_caller(self):
        files = {"snippets/cap.liquid": "{% capture msg %}hi{% endcapture %}"}
        assert render("{% render 'cap' %}{{ msg }}", files=files) == "hi"

    def test_capture_inside_render_replaces_caller_assign(self):
        files = {"snippets/cap.liquid": "{% capture foo %}bar{% endcapture %}"}
        assert render("{% assign foo = 'x' %}{% render 'cap' %}{{ foo }}", files=files) == "bar"

    def test_increment_inside_render_replaces_caller_assign(self):
        files = {"snippets/inc.liquid": "{% increment n %}"}
        assert render("{% assign n = 'x' %}{% render 'inc' %}[{{ n }}]", files=files) == "0[1]"

    def test_counters_are_shared_with_render(self):
        files = {"snippets/inc.liquid": "{% increment n %}"}
        assert render("{% increment n %}{% render 'inc' %}{% increment n %}", files=files) == "012"


class TestSnippetArguments:

    def test_with_default_alias(self):
        files = {"snippets/card.liquid": "{{ card }}"}
        assert render("{% render 'card' with thing %}", {"thing": "T"}, files) == "T"

    def test_with_alias(self):
        files = {"snippets/card.liquid": "{{ p }}"}
        assert render("{% render 'card' with thing as p %}", {"thing": "T"}, files) == "T"

    def test_for_renders_each_item(self):
        files = {"snippets/item.liquid": "{{ it }}{{ forloop.index }};"}
        assert render("{% render 'item' for items as it %}", {"items": ["a", "b"]}, files) == "a1;b2;"

    def test_dashed_name_alias(self):
        files = {"snippets/price-tag.liquid": "{{ price_tag }}"}
        assert render("{% render 'price-tag' with 5 %}", files=files) == "5"


class TestSnippetDiagnostics:

    def test_missing_snippet(self):
        assert render("a{% render 'nope' %}b") == "a<!-- Snippet not found: nope -->b"

    def test_missing_include(self):
        assert render("{% include 'nope' %}") == "<!-- Include not found: nope -->"

    def test_invalid_name(self):
        assert render("{% render '..' %}") == "<!-- Invalid snippet name -->"

    def test_traversal_is_reduced_to_file_name(self):
        files = {"snippets/secret.liquid": "ok"}
        assert render("{% render '../snippets/secret' %}", files=files) == "<!-- Snippet not found: snippetssecret -->"

    def test_recursion_is_cut_at_max_depth(self):
        engine = make_engine({"snippets/loop.liquid": "x{% render 'loop' %}"}, EngineConfig(max_render_depth=3))
        output = engine.render_string("{% render 'loop' %}")
        assert output == "xxx<!-- Max render depth exceeded: loop -->"
