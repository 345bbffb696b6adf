from __future__ import annotations

import pytest

from pydiverse.map2d._internal.errors import (
    NotSupportedError,
    NullKeyError,
    NullValueError,
    check_arg_type,
    check_key,
)
from pydiverse.map2d._internal.util.reraise import reraise


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(NullKeyError, ValueError)
        assert issubclass(NullValueError, ValueError)
        assert issubclass(NotSupportedError, TypeError)

    def test_check_arg_type(self):
        check_arg_type(int, "f", "x", 1)
        with pytest.raises(TypeError, match="must have type `int`, found `str`"):
            check_arg_type(int, "f", "x", "1")
        with pytest.raises(TypeError, match=r"`int \| str`"):
            check_arg_type(int | str, "f", "x", 1.0)

    def test_check_key(self):
        check_key("f", "k", 0)
        check_key("f", "k", "")
        with pytest.raises(NullKeyError, match="parameter `k` of `f`"):
            check_key("f", "k", None)


class TestReraise:
    def test_reraise(self):
        class CustomError(Exception):
            def __init__(self, msg, code):
                super().__init__(msg)
                self.code = code

        with pytest.raises(CustomError, match="^while x: boom\nmore$") as info:
            try:
                raise CustomError("boom", 42)
            except CustomError as e:
                reraise(e, prefix="while x: ", suffix="more")

        assert info.value.code == 42
        assert type(info.value).__name__ == "CustomError"
        assert isinstance(info.value.__cause__, CustomError)
