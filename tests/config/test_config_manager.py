import yaml

from xml_navigator.config import ConfigManager, get_user_config_dir


def test_packaged_defaults_are_loaded():
    cfg = ConfigManager()
    assert cfg.get_value("summary", "max_length") == 50
    assert cfg.get_value("view", "default_column_width") == 100
    assert cfg.get_value("view", "max_recent_files") == 4
    assert cfg.get_value("document", "discard_whitespace") is True
    assert cfg.get_logging_config().get("version") == 1


def test_is_a_singleton():
    assert ConfigManager() is ConfigManager()


def test_user_overrides_merge_per_section(isolated_config):
    assert get_user_config_dir() == isolated_config
    (isolated_config / "navigator.yml").write_text(
        yaml.safe_dump({"summary": {"max_length": 20}}), encoding="utf-8"
    )
    ConfigManager.reset_instance()

    cfg = ConfigManager()

    assert cfg.get_value("summary", "max_length") == 20
    assert cfg.get_value("view", "column_count") == 2


def test_invalid_user_file_keeps_defaults(isolated_config):
    (isolated_config / "navigator.yml").write_text("summary: [oops\n", encoding="utf-8")
    ConfigManager.reset_instance()
    assert ConfigManager().get_value("summary", "max_length") == 50


def test_missing_values_use_default():
    cfg = ConfigManager()
    assert cfg.get_value("nope", "key", "fallback") == "fallback"
    assert cfg.get_section("nope") == {}
