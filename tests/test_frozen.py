from __future__ import annotations

import copy

import pytest

from pydiverse.map2d import FrozenMapping, NotSupportedError


@pytest.fixture
def view():
    return FrozenMapping({"a": 1, "b": [2, 3]})


class TestFrozenMapping:
    def test_read(self, view):
        assert view["a"] == 1
        assert view.get("c") is None
        assert "b" in view
        assert len(view) == 2
        assert list(view) == ["a", "b"]
        assert list(view.items()) == [("a", 1), ("b", [2, 3])]

    def test_copies_input(self):
        source = {"a": 1}
        view = FrozenMapping(source)
        source["b"] = 2
        assert view == {"a": 1}

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda v: v.__setitem__("a", 2),
            lambda v: v.__delitem__("a"),
            lambda v: v.pop("a"),
            lambda v: v.popitem(),
            lambda v: v.clear(),
            lambda v: v.update({"c": 3}),
            lambda v: v.setdefault("c", 3),
        ],
    )
    def test_mutation_fails(self, view, mutate):
        with pytest.raises(NotSupportedError, match="read-only snapshot"):
            mutate(view)
        assert view == {"a": 1, "b": [2, 3]}

    def test_to_dict(self, view):
        d = view.to_dict()
        d["c"] = 3
        assert "c" not in view

    def test_copy(self, view):
        assert copy.copy(view) is view
        deep = copy.deepcopy(view)
        assert deep == view
        assert deep["b"] is not view["b"]

    def test_repr(self, view):
        assert repr(view) == "FrozenMapping({'a': 1, 'b': [2, 3]})"
