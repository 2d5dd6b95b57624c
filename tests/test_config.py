# tests/test_config.py
"""Tests for configuration loading (YAML, .env and ATOMSPACE_* env vars)."""

import os

import pytest

from atomspace import AtomSpace
from atomspace.config import (
    DEFAULT_DATA_DIR,
    DEFAULT_OWNER,
    ConfigError,
    ConfigLoadError,
    build_settings,
    find_config_file,
    get_atomspace,
    get_atomspace_config,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
    load_env_file,
    resolve_owner,
    validate_config,
)


def _write(path, text):
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


class TestLoadEnvFile:
    def test_loads_variables(self, clean_env, monkeypatch):
        # Registered so monkeypatch removes the variable again afterwards
        monkeypatch.setenv("ATOMSPACE_TEST_VALUE", "placeholder")
        monkeypatch.delenv("ATOMSPACE_TEST_VALUE")
        _write(".env", "# comment\nATOMSPACE_TEST_VALUE='hello'\n\n")
        load_env_file()
        assert os.environ["ATOMSPACE_TEST_VALUE"] == "hello"

    def test_does_not_override_existing(self, clean_env, monkeypatch):
        monkeypatch.setenv("ATOMSPACE_OWNER", "from-env")
        _write(".env", "ATOMSPACE_OWNER=from-file\n")
        load_env_file()
        assert os.environ["ATOMSPACE_OWNER"] == "from-env"

    def test_missing_file_is_ignored(self, clean_env):
        load_env_file("does-not-exist.env")


class TestFindConfigFile:
    def test_finds_in_current_directory(self, clean_env):
        _write("atomspace.yaml", "owner: alice\n")
        found = find_config_file()
        assert found is not None
        assert found.name == "atomspace.yaml"

    def test_finds_in_parent_directory(self, clean_env, monkeypatch):
        _write(".atomspacerc", "owner: alice\n")
        child = os.path.join(clean_env, "a", "b")
        os.makedirs(child)
        monkeypatch.chdir(child)
        assert find_config_file().name == ".atomspacerc"


class TestLoadConfig:
    def test_no_config_returns_empty(self, clean_env):
        assert load_config(os.path.join(clean_env, "missing.yaml")) == {}

    def test_explicit_path(self, clean_env):
        _write("custom.yaml", "data_dir: ./kb\nsettings:\n  max_page_size: 50\n")
        config = load_config("custom.yaml")
        assert config["data_dir"] == "./kb"
        assert config["settings"]["max_page_size"] == 50

    def test_invalid_yaml_raises(self, clean_env):
        _write("atomspace.yaml", "owner: [unclosed\n")
        with pytest.raises(ConfigLoadError):
            load_config()

    def test_non_mapping_raises(self, clean_env):
        _write("atomspace.yaml", "- a\n- b\n")
        with pytest.raises(ConfigLoadError):
            load_config()

    def test_unknown_keys_logged(self, clean_env, caplog):
        _write("atomspace.yaml", "owner: alice\ncolour: red\n")
        with caplog.at_level("WARNING", logger="atomspace.config"):
            load_config()
        assert "colour" in caplog.text


class TestValidateConfig:
    def test_valid_config(self):
        config = {"data_dir": "x", "owner": "alice", "settings": {"export_cap": 10}}
        assert validate_config(config) == []

    def test_unknown_root_and_settings_keys(self):
        warnings = validate_config({"provider": "x", "settings": {"nope": 1}})
        assert len(warnings) == 2
        assert "provider" in warnings[0]
        assert "nope" in warnings[1]


class TestSettingsSources:
    def test_env_settings(self, clean_env, monkeypatch):
        monkeypatch.setenv("ATOMSPACE_MAX_PAGE_SIZE", "25")
        monkeypatch.setenv("ATOMSPACE_BUSY_TIMEOUT", "2.5")
        monkeypatch.setenv("ATOMSPACE_LOG_LEVEL", "debug")
        assert get_settings_from_env() == {
            "max_page_size": 25,
            "busy_timeout": 2.5,
            "log_level": "DEBUG",
        }

    def test_invalid_env_number_ignored(self, clean_env, monkeypatch):
        monkeypatch.setenv("ATOMSPACE_EXPORT_CAP", "lots")
        assert get_settings_from_env() == {}

    def test_yaml_settings_filters_unknown(self):
        config = {"settings": {"export_cap": 10, "unknown": True}}
        assert get_settings_from_yaml(config) == {"export_cap": 10}

    def test_precedence_env_over_yaml_over_default(self):
        config = {"settings": {"max_page_size": 50, "export_cap": 10}}
        settings = build_settings(config, env_settings={"max_page_size": 20})
        assert settings.max_page_size == 20
        assert settings.export_cap == 10
        assert settings.default_page_size == 100


class TestResolve:
    def test_owner_precedence(self, clean_env, monkeypatch):
        assert resolve_owner(None, {}) == DEFAULT_OWNER
        assert resolve_owner(None, {"owner": "yaml"}) == "yaml"
        monkeypatch.setenv("ATOMSPACE_OWNER", "env")
        assert resolve_owner(None, {"owner": "yaml"}) == "env"
        assert resolve_owner("cli", {"owner": "yaml"}) == "cli"

    def test_defaults(self, clean_env):
        config = get_atomspace_config()
        assert config.owner == DEFAULT_OWNER
        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.config_path is None

    def test_from_yaml(self, clean_env):
        _write("atomspace.yaml", "owner: alice\ndata_dir: ./kb\nsettings:\n  export_cap: 9\n")
        config = get_atomspace_config()
        assert config.owner == "alice"
        assert config.data_dir == "./kb"
        assert config.settings.export_cap == 9
        assert config.config_path.endswith("atomspace.yaml")

    def test_invalid_setting_is_config_error(self, clean_env):
        _write("atomspace.yaml", "settings:\n  max_page_size: 0\n")
        error = get_atomspace_config()
        assert isinstance(error, ConfigError)
        assert "max_page_size" in error.message

    def test_invalid_yaml_is_config_error(self, clean_env):
        _write("atomspace.yaml", "owner: [unclosed\n")
        assert isinstance(get_atomspace_config(), ConfigError)


class TestGetAtomSpace:
    def test_creates_atomspace(self, clean_env):
        data_dir = os.path.join(clean_env, "kb")
        space = get_atomspace(owner="alice", data_dir=data_dir)

        assert isinstance(space, AtomSpace)
        assert space.owner_id == "alice"
        assert os.path.exists(os.path.join(data_dir, "atomspace.db"))

    def test_owners_share_the_data_dir(self, clean_env):
        data_dir = os.path.join(clean_env, "kb")
        alice = get_atomspace(owner="alice", data_dir=data_dir)
        bob = get_atomspace(owner="bob", data_dir=data_dir)

        cat = alice.add_node("ConceptNode", "cat")
        alice.share_atom(cat.id, "bob")
        assert [a.id for a in bob.get_shared_atoms()] == [cat.id]

    def test_settings_reach_the_stores(self, clean_env, monkeypatch):
        monkeypatch.setenv("ATOMSPACE_DEFAULT_PAGE_SIZE", "1")
        space = get_atomspace(owner="alice", data_dir=os.path.join(clean_env, "kb"))
        space.add_node("ConceptNode", "a")
        space.add_node("ConceptNode", "b")
        assert len(space.get_atoms()) == 1
