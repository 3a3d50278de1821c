"""
Фильтры массивов: скаляры становятся одноэлементными списками.
"""


PRODUCTS = [
    {"title": "b", "price": 300, "vendor": "x", "available": True},
    {"title": "a", "price": 100, "vendor": "y", "available": False},
    {"title": "C", "price": 200, "vendor": "x", "available": True},
]


class TestArrayFilters:

    def test_first_last(self, apply):
        assert apply("first", [1, 2, 3]) == 1
        assert apply("last", [1, 2, 3]) == 3
        assert apply("first", []) is None
        assert apply("first", "abc") == "a"

    def test_join(self, apply):
        assert apply("join", ["a", "b"]) == "a b"
        assert apply("join", ["a", "b"], ", ") == "a, b"
        assert apply("join", "solo", ",") == "solo"

    def test_reverse_and_concat(self, apply):
        assert apply("reverse", [1, 2, 3]) == [3, 2, 1]
        assert apply("concat", [1], [2, 3]) == [1, 2, 3]
        assert apply("concat", [1], None) == [1]

    def test_where(self, apply):
        assert [p["title"] for p in apply("where", PRODUCTS, "vendor", "x")] == ["b", "C"]
        assert [p["title"] for p in apply("where", PRODUCTS, "available")] == ["b", "C"]

    def test_map(self, apply):
        assert apply("map", PRODUCTS, "price") == [300, 100, 200]

    def test_sort(self, apply):
        assert apply("sort", [3, 1, 2]) == [1, 2, 3]
        assert [p["price"] for p in apply("sort", PRODUCTS, "price")] == [100, 200, 300]
        # nil в конце
        assert apply("sort", [2, None, 1]) == [1, 2, None]

    def test_sort_natural_is_case_insensitive(self, apply):
        assert [p["title"] for p in apply("sort_natural", PRODUCTS, "title")] == ["a", "b", "C"]

    def test_uniq_and_compact(self, apply):
        assert apply("uniq", [1, 1, 2, 1.0, "1"]) == [1, 2, "1"]
        assert apply("compact", [1, None, 2]) == [1, 2]

    def test_sum(self, apply):
        assert apply("sum", [1, 2, 3]) == 6
        assert apply("sum", PRODUCTS, "price") == 600
        assert apply("sum", [1, "2", "x"]) == 3
        assert apply("sum", [0.5, 1]) == 1.5

    def test_scalar_becomes_list(self, apply):
        assert apply("map", {"title": "t"}, "title") == ["t"]
        assert apply("reverse", None) == []
