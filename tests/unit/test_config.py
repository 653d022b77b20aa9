"""Unit tests for settings and environment loading."""

import pytest
import yaml

from routinelog.config.env_loader import (
    MissingEnvironmentError,
    get_required_env_var,
    get_optional_env_var,
    get_firebase_settings,
    load_environment,
)
from routinelog.config.loader import (
    ConfigValidationError,
    load_app_config,
    get_username_domain,
    get_default_group,
    get_demo_item_names,
    get_fanout_batch_limit,
    get_calendar_fallback_color,
    get_calendar_max_color_dots,
    get_hidden_item_label,
    get_default_friend_permissions,
    get_config_value,
)


def write_config(tmp_path, data):
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


class TestAppConfig:

    def test_packaged_settings(self, app_config):
        assert get_username_domain(app_config) == "routinelog.app"
        assert get_default_group(app_config) == ("Genel", "#8b5cf6")
        assert get_demo_item_names(app_config) == ["Spor", "Yemek", "Meditasyon", "Kahve"]
        assert get_fanout_batch_limit(app_config) == 490
        assert get_calendar_fallback_color(app_config) == "#8b5cf6"
        assert get_calendar_max_color_dots(app_config) == 4
        assert get_hidden_item_label(app_config) == "Completed activity"
        assert get_default_friend_permissions(app_config) == {
            "viewCalendar": True,
            "viewDetails": False,
            "hideTimes": False,
        }

    def test_getters_fall_back_to_defaults(self):
        assert get_fanout_batch_limit({}) == 490
        assert get_default_group({}) == ("Genel", "#8b5cf6")
        assert get_demo_item_names({}) == []

    def test_get_config_value(self):
        assert get_config_value("logs.fanout_batch_limit") == 490
        assert get_config_value("logs.missing", default="x") == "x"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_app_config(str(tmp_path / "nope.yaml"))

    @pytest.mark.parametrize("data", [
        {"logs": {"fanout_batch_limit": 501}},
        {"logs": {"fanout_batch_limit": 0}},
        {"logs": {"fanout_batch_limit": True}},
        {"groups": {"default_color": "purple"}},
        {"groups": {"default_name": "  "}},
        {"auth": {"username_domain": "a@b"}},
        {"calendar": {"max_color_dots": 0}},
        {"friends": {"default_permissions": {"viewCalendar": True}}},
        {"items": {"demo_names": ["ok", ""]}},
    ])
    def test_invalid_values_rejected(self, tmp_path, data):
        with pytest.raises(ConfigValidationError):
            load_app_config(write_config(tmp_path, data))

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_app_config(str(path))


class TestEnvironment:

    def test_required_env_var(self, monkeypatch):
        monkeypatch.setenv("FIREBASE_API_KEY", "key-123")
        assert get_required_env_var("FIREBASE_API_KEY") == "key-123"

    def test_required_env_var_missing_has_hint(self, monkeypatch):
        monkeypatch.delenv("FIREBASE_API_KEY", raising=False)
        with pytest.raises(MissingEnvironmentError) as exc:
            get_required_env_var("FIREBASE_API_KEY", "Firebase Web API key")
        assert "Hint" in str(exc.value)

    def test_optional_env_var(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_optional_env_var("LOG_LEVEL", "INFO") == "INFO"

    def test_firebase_settings_validates_credentials_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(tmp_path / "missing.json"))
        with pytest.raises(MissingEnvironmentError):
            get_firebase_settings()

    def test_firebase_settings(self, monkeypatch, tmp_path):
        cred = tmp_path / "sa.json"
        cred.write_text("{}", encoding="utf-8")
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(cred))
        monkeypatch.setenv("GCLOUD_PROJECT", "routinelog-test")
        monkeypatch.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8080")
        settings = get_firebase_settings()
        assert settings["project_id"] == "routinelog-test"
        assert settings["credentials_path"] == str(cred)
        assert settings["firestore_emulator_host"] == "localhost:8080"

    def test_load_environment_reads_env_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("ROUTINELOG_TEST_PROJECT=from-file\n", encoding="utf-8")
        # Registered with monkeypatch so the loaded value is removed afterwards
        monkeypatch.setenv("ROUTINELOG_TEST_PROJECT", "")
        monkeypatch.delenv("ROUTINELOG_TEST_PROJECT")

        load_environment(str(env_file))

        assert get_optional_env_var("ROUTINELOG_TEST_PROJECT") == "from-file"

    def test_load_environment_without_file_keeps_system_values(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GCLOUD_PROJECT", "from-system")

        load_environment()

        assert get_optional_env_var("GCLOUD_PROJECT") == "from-system"
