from pathlib import Path

import pytest

# Импорт из унифицированной инфраструктуры
from tests.infrastructure.file_utils import write_tree
from tests.infrastructure.theme_builders import hero_theme, make_engine


@pytest.fixture
def theme_files():
    """Минимальная тема: layout, секция hero со схемой и templates/index.json."""
    return hero_theme()


@pytest.fixture
def engine(theme_files):
    """Движок поверх темы в памяти."""
    return make_engine(theme_files)


@pytest.fixture
def tmptheme(tmp_path: Path, theme_files):
    """Та же тема, записанная на диск."""
    return write_tree(tmp_path, theme_files)
