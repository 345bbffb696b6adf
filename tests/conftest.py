# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
import logging

import pytest

from pydiverse.common.util.structlog import setup_logging
from pydiverse.map2d import Map2d

# Setup


@pytest.fixture
def m():
    m = Map2d()
    m.put("a", "x", 1)
    m.put("a", "y", 2)
    m.put("b", "x", 3)
    return m


setup_logging(log_level=logging.INFO)
