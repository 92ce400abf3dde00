# ruff: noqa

import pytest
from pydantic import ValidationError

from metropower.core.config import Settings


def test_defaults_are_strict_and_in_memory(monkeypatch):
    for name in ("STORAGE_BACKEND", "STRICT_REFERENCES", "DUPLICATE_POLICY", "MANAGER_TOKEN"):
        monkeypatch.delenv(f"METROPOWER_{name}", raising=False)
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "memory"
    assert settings.strict_references is True
    assert settings.duplicate_policy == "reject"
    assert settings.manager_token == ""


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("METROPOWER_STORAGE_BACKEND", "database")
    monkeypatch.setenv("METROPOWER_STRICT_REFERENCES", "false")
    monkeypatch.setenv("METROPOWER_DUPLICATE_POLICY", "ignore")
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "database"
    assert settings.strict_references is False
    assert settings.duplicate_policy == "ignore"


def test_unknown_duplicate_policy_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, duplicate_policy="merge")
