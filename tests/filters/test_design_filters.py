"""
Цветовые и шрифтовые фильтры.

Преобразования форматов разбирают цвет; манипуляции цветом и шрифтом
возвращают значение без изменений.
"""

import pytest


class TestColorConversions:

    def test_to_rgb(self, apply):
        assert apply("color_to_rgb", "#ff0000") == "rgb(255, 0, 0)"
        assert apply("color_to_rgb", "#0f0") == "rgb(0, 255, 0)"

    def test_to_hex(self, apply):
        assert apply("color_to_hex", "rgb(0, 0, 255)") == "#0000ff"

    def test_to_hsl(self, apply):
        assert apply("color_to_hsl", "#ff0000") == "hsl(0, 100%, 50%)"

    def test_extract(self, apply):
        assert apply("color_extract", "#102030", "green") == 32
        assert apply("color_extract", "#ff0000", "lightness") == 50

    def test_brightness(self, apply):
        assert apply("color_brightness", "#ffffff") == 255
        assert apply("color_brightness", "#000000") == 0

    def test_unparsable_color_passes_through(self, apply):
        assert apply("color_to_rgb", "not-a-color") == "not-a-color"


class TestPassThroughStandIns:

    @pytest.mark.parametrize("name", [
        "color_lighten", "color_darken", "color_saturate", "color_desaturate",
        "color_modify", "color_mix", "color_contrast",
    ])
    def test_color_manipulation_is_identity(self, apply, name):
        assert apply(name, "#123456", 10) == "#123456"

    def test_font_filters(self, apply):
        font = {"family": "Assistant"}
        assert apply("font_modify", font, "weight", "bold") == font
        assert apply("font_url", "assistant_n4") == "assistant_n4"
        assert apply("font_face", font) == '@font-face { font-family: "Assistant"; }'
        assert apply("font_face", None) == ""
