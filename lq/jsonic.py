from __future__ import annotations

import json
from decimal import Decimal
from typing import Any


def _to_json(obj: Any) -> Any:
    # Деньги и суммы приходят как Decimal: целое остаётся целым
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    return str(obj)


def dumps(obj: Any) -> str:
    """
    JSON для ответов CLI и фильтра json.
    Без prettify; ensure_ascii=False; завершающий \\n добавляет вызывающий.
    """
    return json.dumps(obj, ensure_ascii=False, default=_to_json)


__all__ = ["dumps"]
