import pytest
import yaml

from example_gate.common import RunSettings, get_config, reload_config, set_config
from example_gate.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    for name in ("MONGODB_URI", "MONGODB_DATABASE", "MONGODB_REPLICA_SET", "AUTH",
                 "SUITE_DEADLINE_SECONDS", "ENV", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    yield
    monkeypatch.undo()
    reload_config()


def test_yaml_values_and_defaults(tmp_path):
    (tmp_path / "config.yaml").write_text(
        yaml.dump({"mongodb": {"uri": "mongodb://db.example.com:27017"}}),
        encoding="utf-8",
    )

    reload_config(tmp_path)
    assert get_config("mongodb.uri") == "mongodb://db.example.com:27017"
    assert get_config("mongodb.database") == "documentation_examples"
    assert get_config("runner.deadline_seconds") == 30
    assert get_config("mongodb.missing", "fallback") == "fallback"


def test_environment_file_is_merged(monkeypatch, tmp_path):
    (tmp_path / "config.yaml").write_text(
        yaml.dump({"mongodb": {"uri": "mongodb://base:27017", "database": "base_db"}}),
        encoding="utf-8",
    )
    (tmp_path / "ci.yaml").write_text(yaml.dump({"mongodb": {"uri": "mongodb://ci:27017"}}), encoding="utf-8")
    monkeypatch.setenv("ENV", "ci")

    reload_config(tmp_path)
    assert get_config("mongodb.uri") == "mongodb://ci:27017"
    assert get_config("mongodb.database") == "base_db"


def test_env_variables_override_yaml(monkeypatch, tmp_path):
    (tmp_path / "config.yaml").write_text(yaml.dump({"mongodb": {"uri": "mongodb://yaml:27017"}}), encoding="utf-8")
    monkeypatch.setenv("MONGODB_URI", "mongodb://env:27017")
    monkeypatch.setenv("AUTH", "auth")
    monkeypatch.setenv("RUNNER__DEADLINE_SECONDS", "12")

    reload_config(tmp_path)
    assert get_config("mongodb.uri") == "mongodb://env:27017"
    assert get_config("mongodb.auth") == "auth"
    assert get_config("runner.deadline_seconds") == "12"


def test_set_config_and_reload(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"runner": {"deadline_seconds": 5}}), encoding="utf-8")

    reload_config(tmp_path)
    assert get_config("runner.deadline_seconds") == 5

    set_config("runner.deadline_seconds", 7)
    assert get_config("runner.deadline_seconds") == 7

    config_path.write_text(yaml.dump({"runner": {"deadline_seconds": 15}}), encoding="utf-8")
    reload_config(tmp_path)
    assert get_config("runner.deadline_seconds") == 15


def test_invalid_yaml_raises_configuration_error(tmp_path):
    (tmp_path / "config.yaml").write_text("mongodb: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        reload_config(tmp_path)


def test_non_mapping_yaml_raises_configuration_error(tmp_path):
    (tmp_path / "config.yaml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        reload_config(tmp_path)


@pytest.mark.parametrize(
    "auth, expected",
    [("auth", True), ("noauth", False), ("true", True), ("", False), ("ON", True)],
)
def test_run_settings_auth_flag(monkeypatch, tmp_path, auth, expected):
    monkeypatch.setenv("AUTH", auth)
    reload_config(tmp_path)

    assert RunSettings.from_config().auth_enabled is expected


def test_run_settings_from_config(monkeypatch, tmp_path):
    monkeypatch.setenv("MONGODB_URI", "mongodb://rs.example.com:27017/?replicaSet=rs0")
    monkeypatch.setenv("MONGODB_REPLICA_SET", "rs0")
    monkeypatch.setenv("SUITE_DEADLINE_SECONDS", "2.5")
    reload_config(tmp_path)

    settings = RunSettings.from_config()
    assert settings.mongodb_uri == "mongodb://rs.example.com:27017/?replicaSet=rs0"
    assert settings.replica_set == "rs0"
    assert settings.deadline_seconds == 2.5
    assert settings.auth_enabled is False


@pytest.mark.parametrize("deadline", ["0", "-1", "soon"])
def test_run_settings_rejects_bad_deadline(monkeypatch, tmp_path, deadline):
    monkeypatch.setenv("SUITE_DEADLINE_SECONDS", deadline)
    reload_config(tmp_path)

    with pytest.raises(ConfigurationError):
        RunSettings.from_config()


def test_deployment_defaults_without_environment(tmp_path):
    reload_config(tmp_path)

    settings = RunSettings.from_config()
    assert settings.mongodb_uri == "mongodb://localhost:27017"
    assert settings.auth_enabled is False
    assert settings.deadline_seconds == 30.0
