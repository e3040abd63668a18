from __future__ import annotations

from pathlib import Path

import pytest

from tumbler.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def isolated_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """ユーザー環境の config.yaml を拾わないように CWD / HOME を隔離し、キャッシュを破棄する。"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)
