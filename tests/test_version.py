from __future__ import annotations

from infra import path as path_mod
from infra import version as version_mod


def test_get_app_version_prefers_env_override(monkeypatch):
    monkeypatch.setattr(version_mod, "_installed_version", lambda: "2.1.1")
    monkeypatch.setenv("FLOW_APP_VERSION", "9.9.9")

    assert version_mod.get_app_version() == "9.9.9"


def test_get_app_version_reads_installed_distribution(monkeypatch):
    monkeypatch.setattr(version_mod, "_installed_version", lambda: "2.1.1")
    monkeypatch.delenv("FLOW_APP_VERSION", raising=False)

    assert version_mod.get_app_version() == "2.1.1"


def test_get_app_version_falls_back_when_not_installed(monkeypatch):
    monkeypatch.setattr(version_mod, "_installed_version", lambda: None)
    monkeypatch.delenv("FLOW_APP_VERSION", raising=False)

    assert version_mod.get_app_version() == version_mod._DEFAULT_APP_VERSION


def test_data_dir_honours_override(monkeypatch, tmp_path):
    target = tmp_path / "custom"
    monkeypatch.setenv("FLOW_DATA_DIR", str(target))

    assert path_mod.user_data_dir() == target
    assert target.is_dir()
    assert path_mod.default_db_path() == target / "flow.db"
    assert path_mod.exports_dir().is_dir()
