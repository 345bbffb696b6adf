# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import (
    Callable,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    MutableMapping,
)
from typing import Any, Generic, TypeVar

import structlog

from pydiverse.map2d._internal import errors
from pydiverse.map2d._internal.frozen import EMPTY, FrozenMapping
from pydiverse.map2d._internal.util.reraise import reraise

R = TypeVar("R", bound=Hashable)
C = TypeVar("C", bound=Hashable)
V = TypeVar("V")
R2 = TypeVar("R2", bound=Hashable)
C2 = TypeVar("C2", bound=Hashable)
V2 = TypeVar("V2")

logger = structlog.get_logger(__name__)


class Map2d(Generic[R, C, V]):
    """
    Mapping from a `(row_key, column_key)` pair to a value.

    The data is stored as a dict of rows, where each row is a dict from column
    key to value. A row exists only while it holds at least one cell. Row based
    access is therefore cheap, while column based access has to scan all rows.

    `None` marks absence: it can neither be used as a key nor be stored as a
    value, and `get` returns `None` for an empty cell.

    Examples
    --------
    >>> m = Map2d()
    >>> m.put("a", "x", 1)
    >>> m.put("a", "y", 2)
    >>> m.put("b", "x", 3)
    >>> m.row_view("a")
    FrozenMapping({'x': 1, 'y': 2})
    >>> m.column_view("x")
    FrozenMapping({'a': 1, 'b': 3})
    >>> len(m)
    3
    """

    def __init__(self, mapping: Mapping[R, Mapping[C, V]] | Map2d | None = None):
        self.mapping: dict[R, dict[C, V]] = dict()
        if mapping is not None:
            self.put_all(mapping)

    # -- single cell ---------------------------------------------------------

    def put(self, row_key: R, column_key: C, value: V) -> V | None:
        """
        Store `value` at the given address.

        :return:
            The value previously stored at the address, or `None`.
        """
        errors.check_key("put", "row_key", row_key)
        errors.check_key("put", "column_key", column_key)
        errors.check_value("put", value, (row_key, column_key))

        row = self.mapping.get(row_key)
        if row is None:
            row = self.mapping[row_key] = dict()
        previous = row.get(column_key)
        row[column_key] = value
        return previous

    def get(self, row_key: R, column_key: C, default: V | None = None) -> V | None:
        row = self.mapping.get(row_key)
        if row is None:
            return default
        return row.get(column_key, default)

    def get_or_default(self, row_key: R, column_key: C, default: V) -> V:
        return self.get(row_key, column_key, default)

    def remove(self, row_key: R, column_key: C) -> V | None:
        """
        Remove the cell at the given address and return its value.

        The row is dropped as soon as its last cell is removed. Removing an
        empty cell does nothing and returns `None`.
        """
        row = self.mapping.get(row_key)
        if row is None:
            return None
        removed = row.pop(column_key, None)
        if not row:
            del self.mapping[row_key]
        return removed

    # -- size ----------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self.mapping

    def non_empty(self) -> bool:
        return not self.is_empty()

    def size(self) -> int:
        return sum(len(row) for row in self.mapping.values())

    def clear(self) -> None:
        self.mapping.clear()

    # -- lookups -------------------------------------------------------------

    def contains_value(self, value: Any) -> bool:
        # `==` semantics, same as `value in dict.values()`
        return any(value in row.values() for row in self.mapping.values())

    def contains_key(self, row_key: R, column_key: C) -> bool:
        row = self.mapping.get(row_key)
        return row is not None and column_key in row

    def contains_row(self, row_key: R) -> bool:
        return bool(self.mapping.get(row_key))

    def contains_column(self, column_key: C) -> bool:
        return any(column_key in row for row in self.mapping.values())

    # -- views ---------------------------------------------------------------

    def row_view(self, row_key: R) -> FrozenMapping[C, V]:
        row = self.mapping.get(row_key)
        if row is None:
            return EMPTY
        return FrozenMapping._wrap(dict(row))

    def column_view(self, column_key: C) -> FrozenMapping[R, V]:
        return FrozenMapping._wrap(self._column(column_key))

    def row_map_view(self) -> FrozenMapping[R, FrozenMapping[C, V]]:
        return FrozenMapping._wrap(
            {
                row_key: FrozenMapping._wrap(dict(row))
                for row_key, row in self.mapping.items()
            }
        )

    def column_map_view(self) -> FrozenMapping[C, FrozenMapping[R, V]]:
        """
        Transposed snapshot of the whole map, indexed by column key first.

        This has to visit every cell since no column index is kept.
        """
        transposed: dict[C, dict[R, V]] = dict()
        for row_key, row in self.mapping.items():
            for column_key, value in row.items():
                transposed.setdefault(column_key, dict())[row_key] = value
        return FrozenMapping._wrap(
            {
                column_key: FrozenMapping._wrap(column)
                for column_key, column in transposed.items()
            }
        )

    def fill_map_from_row(
        self, target: MutableMapping[C, V], row_key: R
    ) -> Map2d[R, C, V]:
        row = self.mapping.get(row_key)
        if row is not None:
            target.update(row)
        return self

    def fill_map_from_column(
        self, target: MutableMapping[R, V], column_key: C
    ) -> Map2d[R, C, V]:
        target.update(self._column(column_key))
        return self

    def _column(self, column_key: C) -> dict[R, V]:
        column = dict()
        for row_key, row in self.mapping.items():
            value = row.get(column_key)
            if value is not None:
                column[row_key] = value
        return column

    # -- bulk writes ---------------------------------------------------------

    def put_all(self, other: Map2d | Mapping[R, Mapping[C, V]]) -> Map2d[R, C, V]:
        """
        Merge all cells of `other` into this map.

        On a collision the value from `other` wins. Existing cells that are not
        present in `other` are kept.
        """
        errors.check_arg_type(Map2d | Mapping, "put_all", "other", other)
        mapping = other.mapping if isinstance(other, Map2d) else other

        for row_key, row in mapping.items():
            errors.check_key("put_all", "row_key", row_key)
            for column_key, value in row.items():
                errors.check_key("put_all", "column_key", column_key)
                errors.check_value("put_all", value, (row_key, column_key))

        if other is self:
            return self

        for row_key, row in mapping.items():
            if not row:
                continue
            self_row = self.mapping.get(row_key)
            if self_row:
                self_row.update(row)
            else:
                self.mapping[row_key] = dict(row)

        logger.debug("map2d_put_all", rows=len(mapping))
        return self

    def put_all_to_row(
        self, source: Mapping[C, V], row_key: R
    ) -> Map2d[R, C, V]:
        errors.check_key("put_all_to_row", "row_key", row_key)
        for column_key, value in source.items():
            errors.check_key("put_all_to_row", "column_key", column_key)
            errors.check_value("put_all_to_row", value, (row_key, column_key))

        if source:
            self.mapping.setdefault(row_key, dict()).update(source)
        return self

    def put_all_to_column(
        self, source: Mapping[R, V], column_key: C
    ) -> Map2d[R, C, V]:
        errors.check_key("put_all_to_column", "column_key", column_key)
        for row_key, value in source.items():
            errors.check_key("put_all_to_column", "row_key", row_key)
            errors.check_value("put_all_to_column", value, (row_key, column_key))

        for row_key, value in source.items():
            self.put(row_key, column_key, value)
        return self

    # -- copies --------------------------------------------------------------

    def copy_with_conversion(
        self,
        row_fn: Callable[[R], R2],
        column_fn: Callable[[C], C2],
        value_fn: Callable[[V], V2],
    ) -> Map2d[R2, C2, V2]:
        """
        Build a new map by applying the given functions to every row key,
        column key and value.

        The functions must be free of side effects. If they map distinct keys to
        the same address, the cell that comes last in iteration order (rows in
        insertion order, then cells within a row in insertion order) wins. The
        new map shares no state with this one.
        """
        result: Map2d[R2, C2, V2] = Map2d()
        collisions = 0

        for row_key, row in self.mapping.items():
            new_row_key = _convert(row_fn, row_key, "row key")
            for column_key, value in row.items():
                new_column_key = _convert(column_fn, column_key, "column key")
                new_value = _convert(value_fn, value, "value")
                if (
                    result.put(new_row_key, new_column_key, new_value) is not None
                ):
                    collisions += 1

        if collisions:
            logger.debug(
                "map2d_conversion_collisions",
                collisions=collisions,
                size=result.size(),
            )
        return result

    def copy(self) -> Map2d[R, C, V]:
        result = Map2d()
        result.mapping = {row_key: dict(row) for row_key, row in self.mapping.items()}
        return result

    __copy__ = copy

    # -- iteration -----------------------------------------------------------

    def row_keys(self) -> list[R]:
        return list(self.mapping.keys())

    def column_keys(self) -> list[C]:
        return list(dict.fromkeys(c for row in self.mapping.values() for c in row))

    def cells(self) -> Iterator[tuple[R, C, V]]:
        for row_key, row in self.mapping.items():
            for column_key, value in row.items():
                yield row_key, column_key, value

    # -- export --------------------------------------------------------------

    def export(self, target):
        """Convert the map to a plain Python structure or a data frame.

        :param target:
            One of ``Dict``, ``DictOfLists``, ``ListOfDicts``, ``Polars`` or
            ``Pandas``. Either the class or an instance can be given.

        Examples
        --------
        >>> from pydiverse.map2d import DictOfLists
        >>> m = Map2d({"a": {"x": 1}, "b": {"x": 3, "y": 4}})
        >>> m.export(DictOfLists)
        {'row': ['a', 'b', 'b'], 'column': ['x', 'x', 'y'], 'value': [1, 3, 4]}
        """
        from pydiverse.map2d._internal.export import export

        return export(self, target)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        *,
        row: str = "row",
        column: str = "column",
        value: str = "value",
    ) -> Map2d:
        from pydiverse.map2d._internal.export import from_records

        return from_records(records, row=row, column=column, value=value)

    @classmethod
    def from_frame(
        cls,
        df,
        *,
        row: str = "row",
        column: str = "column",
        value: str = "value",
    ) -> Map2d:
        """
        Build a map from a polars or pandas data frame in long layout.

        Rows with a null value are skipped.
        """
        from pydiverse.map2d._internal.export import from_frame

        return from_frame(df, row=row, column=column, value=value)

    # -- python protocols ----------------------------------------------------

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self.non_empty()

    def __contains__(self, address: tuple[R, C]) -> bool:
        if not isinstance(address, tuple) or len(address) != 2:
            return False
        row_key, column_key = address
        return self.contains_key(row_key, column_key)

    def __iter__(self) -> Iterator[tuple[R, C]]:
        for row_key, row in self.mapping.items():
            for column_key in row:
                yield row_key, column_key

    def __getitem__(self, address: tuple[R, C]) -> V:
        row_key, column_key = address
        value = self.get(row_key, column_key)
        if value is None:
            raise KeyError(address)
        return value

    def __setitem__(self, address: tuple[R, C], value: V):
        row_key, column_key = address
        self.put(row_key, column_key, value)

    def __delitem__(self, address: tuple[R, C]):
        row_key, column_key = address
        if self.remove(row_key, column_key) is None:
            raise KeyError(address)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Map2d):
            return NotImplemented
        return self.mapping == other.mapping

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.mapping!r})"


def _convert(fn: Callable, arg: Any, what: str) -> Any:
    try:
        return fn(arg)
    except Exception as e:
        reraise(e, prefix=f"failed to convert {what} {arg!r}: ")
