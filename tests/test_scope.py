"""
Цепочка областей видимости и нижний фрейм.
"""

import pytest

from lq.scope import Scope, for_loop, tablerow_loop


class TestResolution:

    def test_order_frames_bottom_globals(self):
        scope = Scope({"x": "global", "g": 1}, {"x": "bottom", "b": 2}, {"x": "base"})
        assert scope.resolve("x") == "base"
        assert scope.resolve("b") == 2
        assert scope.resolve("g") == 1
        assert scope.resolve("missing") is None

    def test_pushed_frame_shadows_and_disappears(self):
        scope = Scope(frame={"x": 1})
        with scope.pushed({"x": 2}):
            assert scope.resolve("x") == 2
        assert scope.resolve("x") == 1

    def test_base_frame_cannot_be_popped(self):
        with pytest.raises(RuntimeError):
            Scope().pop()


class TestAssignment:

    def test_assign_inside_loop_frame_survives(self):
        scope = Scope()
        with scope.pushed({"item": 1}):
            scope.assign("total", 5)
        assert scope.resolve("total") == 5

    def test_globals_are_never_written(self):
        globals_ = {"shop": {"name": "A"}}
        scope = Scope(globals_)
        scope.assign("shop", "override")
        assert scope.resolve("shop") == "override"
        assert globals_ == {"shop": {"name": "A"}}

    def test_assign_bottom_removes_stale_shadow(self):
        scope = Scope(frame={"x": "old"})
        scope.assign_bottom("x", "new")
        assert scope.resolve("x") == "new"


class TestIsolation:

    def test_isolated_sees_only_passed_variables(self):
        parent = Scope({"shop": 1}, frame={"y": 2})
        child = parent.isolated({"x": 1})
        assert child.resolve("x") == 1
        assert child.resolve("y") is None
        assert child.resolve("shop") == 1

    def test_bottom_is_shared(self):
        parent = Scope()
        child = parent.isolated()
        child.assign_bottom("captured", "hi")
        child.assign("local", 1)
        assert parent.resolve("captured") == "hi"
        assert parent.resolve("local") is None

    def test_assign_bottom_clears_ancestor_frames(self):
        parent = Scope(frame={"x": "old"})
        child = parent.isolated().isolated()
        child.assign_bottom("x", "new")
        assert parent.resolve("x") == "new"


class TestCounters:

    def test_increment_and_decrement(self):
        scope = Scope()
        assert [scope.increment("n") for _ in range(3)] == [0, 1, 2]
        assert scope.decrement("m") == -1
        assert scope.decrement("m") == -2

    def test_counters_shared_with_isolated_scope(self):
        scope = Scope()
        scope.increment("n")
        assert scope.isolated().increment("n") == 1

    def test_cycle_index_grows(self):
        scope = Scope()
        assert [scope.next_cycle_index("k") for _ in range(4)] == [0, 1, 2, 3]
        assert scope.next_cycle_index("other") == 0


class TestLoopObjects:

    def test_for_loop(self):
        loop = for_loop(1, 3)
        assert loop["index"] == 2
        assert loop["rindex"] == 2
        assert loop["rindex0"] == 1
        assert not loop["first"] and not loop["last"]
        assert loop["parentloop"] is None

    def test_tablerow_loop(self):
        loop = tablerow_loop(4, 5, 2)
        assert loop["col"] == 1
        assert loop["row"] == 3
        assert loop["col_last"] is True
        assert "parentloop" not in loop
