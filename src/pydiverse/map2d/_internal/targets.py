# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# This module defines the config classes provided to the user to select the
# format of `Map2d.export`.


class Target: ...


class Polars(Target):
    def __init__(self, *, lazy: bool = False, wide: bool = False) -> None:
        self.lazy = lazy
        self.wide = wide


class Pandas(Target):
    def __init__(self, *, wide: bool = False) -> None:
        self.wide = wide


class Dict(Target): ...


class DictOfLists(Target): ...


class ListOfDicts(Target): ...
