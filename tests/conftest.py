import sys
from pathlib import Path

import pytest

# Ensure local source package (src/httpbuilder) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("HTTPBUILDER_TIMEOUT", raising=False)
    monkeypatch.delenv("HTTPBUILDER_STRICT_DECODING", raising=False)
    monkeypatch.delenv("HTTPBUILDER_LOG_TRANSPORT", raising=False)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def items_url(base_url: str) -> str:
    return f"{base_url}/v1/items"


@pytest.fixture
def collector():
    from httpbuilder import DebugCollector

    return DebugCollector()
