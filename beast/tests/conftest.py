"""Shared test fixtures for the Beast test suite."""
from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from returns.io import IOSuccess

from beast.beast_modules.chain import Beast

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture


@pytest.fixture
def sample_beast() -> Beast:
    """Return a Beast wrapping [1, 2, 3]."""
    return Beast([1, 2, 3])


@pytest.fixture
def mock_stderr(mocker: MockerFixture) -> MagicMock:
    """Patch the logging side channel at the io_ops boundary."""
    return mocker.patch(
        "beast.beast_modules.io_ops.write_stderr",
        return_value=IOSuccess(None),
    )
