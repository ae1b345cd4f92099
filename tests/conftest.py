"""Root conftest: shared test configuration."""

import os
import sys

import pytest

# Tests never touch a real database server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def int_digit_limit():
    """Pin the interpreter's int/str conversion limit to its default (4300 digits)."""
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(previous)
