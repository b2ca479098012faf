from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers import NET_DEV


@pytest.fixture
def net_dev_file(tmp_path: Path) -> Path:
    path = tmp_path / "dev"
    path.write_text(NET_DEV, encoding="utf-8")
    return path
