import pytest

from lq.config import EngineConfig
from lq.filters import create_filter_registry


@pytest.fixture
def filters():
    """Реестр фильтров с конфигурацией по умолчанию."""
    return create_filter_registry(EngineConfig())


@pytest.fixture
def apply(filters):
    """apply("name", value, *args, **kwargs) -> результат фильтра."""
    def _apply(name, value, *args, **kwargs):
        return filters.apply(name, value, list(args), kwargs)
    return _apply
