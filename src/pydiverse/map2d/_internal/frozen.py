# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import copy
from collections.abc import ItemsView, Iterable, KeysView, Mapping, ValuesView
from typing import Any, NoReturn, TypeVar

from pydiverse.map2d._internal.errors import NotSupportedError

KT = TypeVar("KT")
VT = TypeVar("VT")


class FrozenMapping(Mapping[KT, VT]):
    """
    Read-only mapping over a private copy of its input.

    Every view returned by `Map2d` is a `FrozenMapping`. Since the data is
    copied on construction, later changes to the source are not visible through
    the view. Any attempt to modify the view raises `NotSupportedError`.
    """

    __slots__ = ("__data",)

    def __init__(self, seq: Mapping[KT, VT] | Iterable[tuple[KT, VT]] = (), /):
        self.__data = dict(seq)

    @classmethod
    def _wrap(cls, data: dict[KT, VT]) -> FrozenMapping[KT, VT]:
        # takes ownership of `data`, the caller must not keep a reference
        view = cls.__new__(cls)
        view.__data = data
        return view

    def __getitem__(self, key: KT) -> VT:
        return self.__data[key]

    def __iter__(self) -> Iterable[KT]:
        yield from self.__data.__iter__()

    def __len__(self) -> int:
        return len(self.__data)

    def __contains__(self, item) -> bool:
        return item in self.__data

    def __repr__(self):
        return f"{self.__class__.__name__}({self.__data!r})"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self.__class__._wrap(copy.deepcopy(self.__data, memo))

    def items(self) -> ItemsView[KT, VT]:
        return self.__data.items()

    def keys(self) -> KeysView[KT]:
        return self.__data.keys()

    def values(self) -> ValuesView[VT]:
        return self.__data.values()

    def to_dict(self) -> dict[KT, VT]:
        """Return a mutable shallow copy as a plain `dict`."""
        return dict(self.__data)

    def _read_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise NotSupportedError(
            f"`{self.__class__.__name__}` is a read-only snapshot and cannot be "
            "modified\n"
            "hint: call `to_dict()` to get a mutable copy."
        )

    __setitem__ = _read_only
    __delitem__ = _read_only
    pop = _read_only
    popitem = _read_only
    clear = _read_only
    update = _read_only
    setdefault = _read_only
    __ior__ = _read_only


EMPTY: FrozenMapping[Any, Any] = FrozenMapping()
