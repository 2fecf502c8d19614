"""Shared fixtures: keep tests away from the user's real settings."""

import pytest

from takehome.sdk.taxes import clear_rules_cache, load_tax_rules


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point settings at an empty temp dir and use the packaged tax rules."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TAKE_HOME_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("TAKE_HOME_TAX_RULES_DIR", raising=False)
    clear_rules_cache()
    yield config_dir
    clear_rules_cache()


@pytest.fixture
def rules_2025():
    return load_tax_rules("2025")


@pytest.fixture
def rules_2024():
    return load_tax_rules("2024")
