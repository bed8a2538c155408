from collections.abc import Callable
from pathlib import Path

import pytest

from simplexpr.simplexpr_cli import MAX_EXPONENT_ENV


@pytest.fixture  # type: ignore[misc]
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # keep a developer's shell setting from leaking into CLI tests
    monkeypatch.delenv(MAX_EXPONENT_ENV, raising=False)
    return monkeypatch


@pytest.fixture  # type: ignore[misc]
def sexpr_file(tmp_path: Path) -> Callable[[str], Path]:
    def write(source: str, name: str = "input.sexpr") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return write
