# SPDX-License-Identifier: GPL-2.0-or-later
import os
import sys
from pathlib import Path

import pytest

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent

if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
for _p in (_THIS_DIR, _THIS_DIR / "fixtures"):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))

os.environ.setdefault("PYTHONPATH", str(_REPO_ROOT))


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without filesystem fixtures")
    config.addinivalue_line("markers", "integration: tests that touch files or run the CLI end to end")


@pytest.fixture()
def reg_file(tmp_path):
    """Write a .reg file (text or bytes) into tmp_path and return its path."""
    def _write(content, name="test.reg", encoding="utf-8"):
        p = tmp_path / name
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_bytes(content.encode(encoding))
        return p
    return _write
