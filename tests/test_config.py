"""
Конфигурация движка lq.yaml.
"""

import pytest

from lq.config import EngineConfig, load_engine_config
from lq.errors import ThemeConfigError
from tests.infrastructure import write


class TestEngineConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_engine_config(tmp_path) == EngineConfig()

    def test_values_are_loaded(self, tmp_path):
        write(tmp_path / "lq.yaml", "default_locale: fr\nmax_render_depth: 10\nmoney_format: '{{amount}} EUR'\n")
        cfg = load_engine_config(tmp_path)
        assert cfg.default_locale == "fr"
        assert cfg.max_render_depth == 10
        assert cfg.money_format == "{{amount}} EUR"
        assert cfg.currency == "USD"

    def test_empty_file(self, tmp_path):
        write(tmp_path / "lq.yaml", "")
        assert load_engine_config(tmp_path) == EngineConfig()

    @pytest.mark.parametrize("text", [
        "unknown_key: 1\n",
        "max_render_depth: 0\n",
        "max_render_depth: true\n",
        "design_mode: 'yes'\n",
        "currency: 5\n",
        "- a\n- b\n",
        "key: [unclosed\n",
    ])
    def test_invalid_config(self, tmp_path, text):
        write(tmp_path / "lq.yaml", text)
        with pytest.raises(ThemeConfigError):
            load_engine_config(tmp_path)

    def test_to_dict_round_trip(self):
        cfg = EngineConfig(currency="EUR")
        assert EngineConfig.from_dict(cfg.to_dict()) == cfg
        assert "default_locale" not in cfg.to_dict()
