import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _is_e2e_test(request: pytest.FixtureRequest) -> bool:
    return "tests/e2e/" in str(request.node.fspath).replace("\\", "/")


@pytest.fixture(autouse=True)
def isolated_narco_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "NARCO_STORAGE",
        "NARCO_SAVE_PATH",
        "NARCO_DATABASE_URL",
        "NARCO_RNG_SEED",
        "NARCO_ACCOUNT",
        "NARCO_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def e2e_memory_storage(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if not _is_e2e_test(request):
        return

    monkeypatch.setenv("NARCO_STORAGE", "memory")
    monkeypatch.setenv("NARCO_RNG_SEED", "1234")
