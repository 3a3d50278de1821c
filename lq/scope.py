"""
Цепочка областей видимости для одного прохода рендеринга.

Scope представляет собой стек фреймов (словарей). Чтение идёт сверху вниз, затем
в нижний (bottom) фрейм и, наконец, в глобальные объекты витрины.

Нижний фрейм принадлежит одному проходу рендеринга верхнего уровня:
в него явно пишут capture/increment/decrement/cycle, поэтому состояние,
заданное глубоко во вложенном render, остаётся видимым до конца прохода.
Изолированная область (render/section) получает новый стек, но тот же
нижний фрейм; унаследованная (include) использует тот же объект Scope.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .values import Value


Frame = Dict[str, Any]

# Зарезервированный ключ нижнего фрейма для счётчиков cycle
CYCLES_KEY = "__cycles__"


class Scope:
    """
    Стек фреймов переменных с явным нижним фреймом.

    Attributes:
        globals: Глобальные объекты (shop, settings, ...), только чтение
        bottom: Нижний фрейм прохода рендеринга
        frames: Фреймы над нижним, последний из них верхний
        parent: Область, из которой создана изолированная (None у области прохода)
    """

    def __init__(
        self,
        globals_: Optional[Mapping[str, Any]] = None,
        bottom: Optional[Frame] = None,
        frame: Optional[Frame] = None,
        parent: Optional["Scope"] = None,
    ):
        self.globals: Mapping[str, Any] = globals_ if globals_ is not None else {}
        self.bottom: Frame = bottom if bottom is not None else {}
        self.frames: List[Frame] = [frame if frame is not None else {}]
        self.parent = parent

    # ---- чтение ----

    def resolve(self, name: str) -> Value:
        """
        Разрешает имя переменной.

        Отсутствующая переменная даёт nil без исключения.
        """
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        if name in self.bottom:
            return self.bottom[name]
        return self.globals.get(name)

    def has(self, name: str) -> bool:
        """Проверяет, определена ли переменная на каком-либо уровне."""
        return (
            any(name in frame for frame in self.frames)
            or name in self.bottom
            or name in self.globals
        )

    # ---- запись ----

    def assign(self, name: str, value: Value) -> None:
        """
        Присваивание в базовый фрейм области (assign).

        Фреймы циклов лежат выше базового, поэтому значение,
        присвоенное в теле цикла, остаётся видимым после него.
        """
        self.frames[0][name] = value

    def assign_bottom(self, name: str, value: Value) -> None:
        """
        Присваивание в нижний фрейм (capture, increment, decrement).

        Одноимённые переменные снимаются со всех фреймов этой области
        и областей, из которых она создана: после возврата из render
        вызывающий шаблон видит новое значение.
        """
        scope: Optional[Scope] = self
        while scope is not None:
            for frame in scope.frames:
                frame.pop(name, None)
            scope = scope.parent
        self.bottom[name] = value

    # ---- управление стеком ----

    def push(self, frame: Optional[Frame] = None) -> Frame:
        """Добавляет новый верхний фрейм и возвращает его."""
        new_frame = frame if frame is not None else {}
        self.frames.append(new_frame)
        return new_frame

    def pop(self) -> Frame:
        """Удаляет верхний фрейм."""
        if len(self.frames) <= 1:
            raise RuntimeError("Cannot pop the base frame of a scope")
        return self.frames.pop()

    @contextmanager
    def pushed(self, frame: Optional[Frame] = None) -> Iterator[Frame]:
        """Контекстный менеджер: фрейм существует только внутри блока."""
        new_frame = self.push(frame)
        try:
            yield new_frame
        finally:
            self.pop()

    def isolated(self, variables: Optional[Mapping[str, Any]] = None) -> "Scope":
        """
        Создаёт изолированную дочернюю область (render, section).

        Видимы только явно переданные переменные, нижний фрейм
        и глобальные объекты. Переменные вызывающего шаблона не видны.
        """
        return Scope(self.globals, self.bottom, dict(variables or {}), parent=self)

    # ---- счётчики нижнего фрейма ----

    def increment(self, name: str) -> int:
        """Возвращает значение до увеличения; первый вызов даёт 0."""
        current = self._counter(name)
        self.assign_bottom(name, current + 1)
        return current

    def decrement(self, name: str) -> int:
        """Возвращает значение после уменьшения; первый вызов даёт -1."""
        current = self._counter(name) - 1
        self.assign_bottom(name, current)
        return current

    def _counter(self, name: str) -> int:
        value = self.bottom.get(name, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            return 0
        return value

    def next_cycle_index(self, key: str) -> int:
        """
        Продвигает счётчик группы cycle и возвращает его прежнее значение.

        Счётчик растёт при каждом вызове независимо от списка значений.
        """
        cycles = self.bottom.setdefault(CYCLES_KEY, {})
        counter = cycles.get(key, 0)
        cycles[key] = counter + 1
        return counter


def for_loop(index0: int, length: int, parentloop: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Строит объект forloop для одной итерации.

    Args:
        index0: Индекс итерации с нуля
        length: Число итераций
        parentloop: forloop внешнего цикла или None
    """
    return {
        "index": index0 + 1,
        "index0": index0,
        "rindex": length - index0,
        "rindex0": length - index0 - 1,
        "first": index0 == 0,
        "last": index0 == length - 1,
        "length": length,
        "parentloop": parentloop,
    }


def tablerow_loop(index0: int, length: int, cols: int) -> Dict[str, Any]:
    """
    Строит объект tablerowloop для одной итерации.

    Колонки и строки нумеруются с 1; col_last истинно на последней
    колонке строки или на последнем элементе.
    """
    col0 = index0 % cols
    loop = for_loop(index0, length)
    loop.pop("parentloop")
    loop.update({
        "col": col0 + 1,
        "col0": col0,
        "col_first": col0 == 0,
        "col_last": col0 == cols - 1 or index0 == length - 1,
        "row": index0 // cols + 1,
    })
    return loop


__all__ = ["Scope", "Frame", "CYCLES_KEY", "for_loop", "tablerow_loop"]
