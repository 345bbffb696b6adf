# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import typing
from typing import Any


class NullKeyError(ValueError):
    """
    Raised when `None` is used as a row or column key on a write path.
    """


class NullValueError(ValueError):
    """
    Raised when `None` is written as a cell value. `None` marks absence and can
    never be stored.
    """


class NotSupportedError(TypeError):
    """
    Signals a mutation of a read-only view.
    """


class DataTypeError(TypeError):
    """
    Exception related to cell keys or values that a target cannot represent.
    """


# Our error message format: The first line is in lowercase letters, without a dot at
# the end. More detail is given in the following lines in normal english sentences.
# To give advice to to the user, we write `hint: ...`.


def check_arg_type(
    expected_type: type,
    fn: str,
    param_name: str,
    arg: Any,
):
    if not isinstance(arg, expected_type):
        type_args = typing.get_args(expected_type)
        expected_type_str = (
            expected_type.__name__
            if not type_args
            else " | ".join(t.__name__ for t in type_args)
        )
        raise TypeError(
            f"argument for parameter `{param_name}` of `{fn}` must have type "
            f"`{expected_type_str}`, found `{type(arg).__name__}` instead"
        )


def check_key(fn: str, param_name: str, key: Any):
    if key is None:
        raise NullKeyError(
            f"argument for parameter `{param_name}` of `{fn}` must not be `None`\n"
            "`None` marks an absent cell and cannot be used as a key."
        )


def check_value(fn: str, value: Any, address: tuple[Any, Any]):
    if value is None:
        raise NullValueError(
            f"cannot store `None` at address {address!r} in `{fn}`\n"
            "`None` marks an absent cell.\n"
            "hint: use `remove` to delete a cell."
        )
