# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd
import polars as pl
import structlog

from pydiverse.map2d._internal import errors
from pydiverse.map2d._internal.map2d import Map2d
from pydiverse.map2d._internal.targets import (
    Dict,
    DictOfLists,
    ListOfDicts,
    Pandas,
    Polars,
    Target,
)

logger = structlog.get_logger(__name__)

ROW = "row"
COLUMN = "column"
VALUE = "value"


def export(m: Map2d, target: Target | type[Target]) -> Any:
    errors.check_arg_type(Target | type, "export", "target", target)

    if not isinstance(target, Target):
        if not issubclass(target, Target):
            raise TypeError(
                f"argument for parameter `target` of `export` must be a `Target`, "
                f"found class `{target.__name__}` instead"
            )
        target = target()

    logger.debug(
        "map2d_export", target=type(target).__name__, rows=len(m.mapping)
    )

    if isinstance(target, Dict):
        return {row_key: dict(row) for row_key, row in m.mapping.items()}

    elif isinstance(target, DictOfLists):
        return _long(m)

    elif isinstance(target, ListOfDicts):
        return [
            {ROW: row_key, COLUMN: column_key, VALUE: value}
            for row_key, column_key, value in m.cells()
        ]

    elif isinstance(target, Polars):
        df = _wide_polars(m) if target.wide else _polars_frame(_long(m))
        return df.lazy() if target.lazy else df

    elif isinstance(target, Pandas):
        if target.wide:
            return pd.DataFrame.from_dict(
                {row_key: dict(row) for row_key, row in m.mapping.items()},
                orient="index",
            )
        return pd.DataFrame(_long(m), columns=[ROW, COLUMN, VALUE])

    raise AssertionError


def _long(m: Map2d) -> dict[str, list]:
    cols = {ROW: [], COLUMN: [], VALUE: []}
    for row_key, column_key, value in m.cells():
        cols[ROW].append(row_key)
        cols[COLUMN].append(column_key)
        cols[VALUE].append(value)
    return cols


def _wide_polars(m: Map2d) -> pl.DataFrame:
    # polars column names must be strings, so column keys are converted with str
    row_keys = m.row_keys()
    data = {ROW: row_keys}
    for column_key in m.column_keys():
        name = str(column_key)
        if name in data:
            raise ValueError(
                f"column key {column_key!r} clashes with another column of the "
                "wide frame\n"
                f"Column keys are converted with `str`, and `{ROW}` is reserved "
                "for the row keys.\n"
                "hint: export with `Polars(wide=False)` instead."
            )
        data[name] = [m.get(row_key, column_key) for row_key in row_keys]
    return _polars_frame(data)


def _polars_frame(data: dict[str, list]) -> pl.DataFrame:
    # polars builds every column with a single dtype and we do not coerce
    try:
        return pl.DataFrame(data)
    except (TypeError, pl.exceptions.PolarsError) as e:
        raise errors.DataTypeError(
            "cannot build a polars frame from keys / values of mixed types\n"
            f"Polars reported: {e}\n"
            "hint: use `Pandas()` or `ListOfDicts` to export this map."
        ) from e


def from_records(
    records: Iterable[Mapping[str, Any]],
    *,
    row: str = ROW,
    column: str = COLUMN,
    value: str = VALUE,
) -> Map2d:
    m = Map2d()
    for record in records:
        cell_value = record.get(value)
        if cell_value is None:
            continue
        m.put(record.get(row), record.get(column), cell_value)
    logger.debug("map2d_from_records", size=m.size())
    return m


def from_frame(
    df: pl.DataFrame | pl.LazyFrame | pd.DataFrame,
    *,
    row: str = ROW,
    column: str = COLUMN,
    value: str = VALUE,
) -> Map2d:
    errors.check_arg_type(
        pl.DataFrame | pl.LazyFrame | pd.DataFrame, "from_frame", "df", df
    )

    if isinstance(df, pd.DataFrame):
        df = df[[row, column, value]]
        null_keys = df[[row, column]].isna().any(axis=None)
        if null_keys:
            raise errors.NullKeyError(
                f"found null values in the key columns `{row}` / `{column}` of "
                "the data frame\n"
                "Null marks an absent cell and cannot be used as a key."
            )
        df = df[df[value].notna()]
        rows = df.itertuples(index=False, name=None)
    else:
        if isinstance(df, pl.LazyFrame):
            df = df.collect()
        rows = df.select(row, column, value).filter(pl.col(value).is_not_null())
        rows = rows.iter_rows()

    m = Map2d()
    for row_key, column_key, cell_value in rows:
        m.put(row_key, column_key, cell_value)
    logger.debug("map2d_from_frame", size=m.size())
    return m
