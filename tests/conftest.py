"""Shared test fixtures."""

import pytest

import pyfly


@pytest.fixture
def base():
    """2016-12-03 22:15:35 +0000 UTC"""
    return pyfly.date(2016, 12, 3, 22, 15, 35)


@pytest.fixture
def precise():
    """2016-12-03 22:15:35.123456789 +0000 UTC"""
    return pyfly.date(2016, 12, 3, 22, 15, 35, 123456789)
