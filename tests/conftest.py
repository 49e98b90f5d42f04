# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""Shared fixtures."""

import pytest

from csspectrum import Registry


@pytest.fixture
def registry():
    """A fresh registry with the built-in formats, spaces and names."""
    return Registry()
