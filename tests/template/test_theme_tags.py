"""
Теги темы: capture, счётчики, cycle, tablerow, paginate, form и блоки ресурсов.
"""

from tests.infrastructure import hero_theme, render


class TestCapture:

    def test_capture(self):
        assert render("{% capture greeting %}Hi {{ name }}{% endcapture %}[{{ greeting }}]", {"name": "Bo"}) == "[Hi Bo]"

    def test_capture_overrides_assign(self):
        assert render("{% assign x = 1 %}{% capture x %}2{% endcapture %}{{ x }}") == "2"


class TestCounters:

    def test_increment(self):
        assert render("{% increment n %}{% increment n %}{% increment n %}") == "012"

    def test_decrement(self):
        assert render("{% decrement n %}{% decrement n %}") == "-1-2"

    def test_counters_are_independent_of_assign(self):
        assert render("{% assign n = 10 %}{% increment c %}{{ n }}") == "010"


class TestCycle:

    def test_cycle_wraps(self):
        template = "{% for i in (1..4) %}{% cycle 'a', 'b', 'c' %}{% endfor %}"
        assert render(template) == "abca"

    def test_named_groups_are_separate(self):
        template = "{% cycle 'g1': 'a', 'b' %}{% cycle 'g2': 'a', 'b' %}{% cycle 'g1': 'a', 'b' %}"
        assert render(template) == "aab"

    def test_same_values_share_counter(self):
        assert render("{% cycle 'x', 'y' %}{% cycle 'x', 'y' %}") == "xy"

    def test_named_group_with_different_lists(self):
        template = "{% cycle 'g': 'a', 'b' %}{% cycle 'g': 'x', 'y', 'z' %}"
        assert render(template) == "ay"


class TestTablerow:

    def test_rows_and_cells(self):
        template = "{% tablerow i in items cols: 2 %}{{ i }}{% endtablerow %}"
        expected = (
            '<tr class="row1"><td class="col1">1</td><td class="col2">2</td></tr>'
            '<tr class="row2"><td class="col1">3</td></tr>'
        )
        assert render(template, {"items": [1, 2, 3]}) == expected

    def test_tablerowloop(self):
        template = "{% tablerow i in items cols: 2 %}{{ tablerowloop.col }}{% endtablerow %}"
        assert "<td class=\"col2\">2</td>" in render(template, {"items": ["a", "b"]})

    def test_limit(self):
        template = "{% tablerow i in items limit: 1 %}{{ i }}{% endtablerow %}"
        assert render(template, {"items": [1, 2]}) == '<tr class="row1"><td class="col1">1</td></tr>'


class TestPaginate:

    def test_first_page(self):
        template = (
            "{% paginate collection.products by 2 %}"
            "{% for p in collection.products %}{{ p }}{% endfor %}"
            "|{{ paginate.pages }}|{{ paginate.items }}|{{ paginate.next.url }}"
            "{% endpaginate %}"
        )
        variables = {"collection": {"products": ["a", "b", "c"]}}
        assert render(template, variables) == "ab|2|3|?page=2"

    def test_single_page_has_no_next(self):
        template = "{% paginate items by 5 %}{% if paginate.next %}next{% else %}last{% endif %}{% endpaginate %}"
        assert render(template, {"items": [1]}) == "last"

    def test_original_collection_untouched(self):
        template = "{% paginate c.items by 1 %}{% endpaginate %}{{ c.items | size }}"
        assert render(template, {"c": {"items": [1, 2]}}) == "2"


class TestForm:

    def test_form_wrapper(self):
        template = "{% form 'contact', class: 'f' %}{{ form.type }}{% endform %}"
        assert render(template) == '<form action="/form/contact" method="post" class="f">contact</form>'


class TestResourceBlocks:

    def test_style(self):
        assert render("{% style %}a { color: {{ c }}; }{% endstyle %}", {"c": "red"}) == "<style>a { color: red; }</style>"

    def test_stylesheet_and_javascript_are_raw(self):
        assert render("{% stylesheet %}{{ x }}{% endstylesheet %}") == "<style>{{ x }}</style>"
        assert render("{% javascript %}go();{% endjavascript %}") == "<script>go();</script>"
        assert render("{% javascript %}{% endjavascript %}") == ""

    def test_schema_and_layout_are_silent(self):
        assert render('a{% schema %}{"name": "x"}{% endschema %}b') == "ab"
        assert render("{% layout none %}x") == "x"

    def test_content_for(self):
        assert render("{% content_for 'header' %}", {"content_for_header": "<meta>"}) == "<meta>"


class TestSameNameNesting:

    def test_capture_in_capture(self):
        template = "{% capture a %}1{% capture b %}2{% endcapture %}3{% endcapture %}[{{ a }}|{{ b }}]"
        assert render(template) == "[13|2]"

    def test_form_in_form(self):
        template = "{% form 'a' %}x{% form 'b' %}{{ form.type }}{% endform %}{{ form.type }}{% endform %}"
        expected = (
            '<form action="/form/a" method="post">x'
            '<form action="/form/b" method="post">b</form>a</form>'
        )
        assert render(template) == expected

    def test_style_in_style(self):
        template = "{% style %}a{% style %}b{% endstyle %}c{% endstyle %}"
        assert render(template) == "<style>a<style>b</style>c</style>"

    def test_stylesheet_in_stylesheet_stays_text(self):
        template = "{% stylesheet %}a{% stylesheet %}b{% endstylesheet %}c{% endstylesheet %}"
        assert render(template) == "<style>a{% stylesheet %}b{% endstylesheet %}c</style>"

    def test_javascript_in_javascript_stays_text(self):
        template = "{% javascript %}a{% javascript %}b{% endjavascript %}c{% endjavascript %}"
        assert render(template) == "<script>a{% javascript %}b{% endjavascript %}c</script>"

    def test_schema_in_schema(self):
        assert render("a{% schema %}{% schema %}{}{% endschema %}{% endschema %}b") == "ab"

    def test_tablerow_in_tablerow(self):
        template = "{% tablerow i in outer %}{% tablerow j in inner %}{{ i }}{{ j }}{% endtablerow %}{% endtablerow %}"
        inner = '<tr class="row1"><td class="col1">12</td></tr>'
        expected = f'<tr class="row1"><td class="col1">{inner}</td></tr>'
        assert render(template, {"outer": [1], "inner": [2]}) == expected

    def test_paginate_in_paginate(self):
        template = (
            "{% paginate a by 1 %}"
            "{% paginate b by 1 %}{{ a | size }}{{ b | size }}{{ paginate.items }}{% endpaginate %}"
            "|{{ paginate.items }}"
            "{% endpaginate %}"
        )
        assert render(template, {"a": [1, 2], "b": [1, 2, 3]}) == "113|2"


class TestSectionTag:

    def test_static_section_uses_defaults(self):
        output = render("{% section 'hero' %}", files=hero_theme())
        assert output.startswith('<div id="shopify-section-hero" class="shopify-section"><h1>Welcome</h1>')

    def test_missing_section(self):
        assert "<!-- Section not found: nope -->" in render("{% section 'nope' %}")

    def test_section_group(self):
        files = hero_theme()
        files["sections/header-group.json"] = (
            '{"type": "header", "name": "Header", "sections": {"h": {"type": "hero"}}, "order": ["h"]}'
        )
        output = render("{% sections 'header-group' %}", files=files)
        assert 'class="shopify-section shopify-section-group-header-group"' in output
        assert "<h1>Welcome</h1>" in output

    def test_missing_group_renders_nothing(self):
        assert render("[{% sections 'nope' %}]") == "[]"
