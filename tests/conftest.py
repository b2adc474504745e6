from __future__ import annotations

import pytest

from opennumeric.config import config


@pytest.fixture(autouse=True)
def restore_config():
    # The library config is a module level singleton, tests must not leak changes.
    saved = dict(config)
    yield config
    config.update(saved)
