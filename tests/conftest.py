from __future__ import annotations

from pathlib import Path

import pytest

from npm_conformance.profile import PackageProfile, load_profile
from tests._fixtures.package_builder import PackageBuilder


@pytest.fixture
def package_builder(tmp_path: Path) -> PackageBuilder:
    """Provide a conforming package tree rooted at the pytest tmp_path."""
    return PackageBuilder(tmp_path).build()


@pytest.fixture
def profile() -> PackageProfile:
    return load_profile("angular-core")


@pytest.fixture(autouse=True)
def _clear_profile_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NPM_CONFORMANCE_PROFILE", raising=False)
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
