from cosmonaute.config import APP_ID, Config, default_config_path, load_config, save_config


def test_round_trip(tmp_path):
    path = tmp_path / "config.json"
    save_config(Config(demo="hello"), path)
    assert load_config(path) == Config(demo="hello")


def test_save_creates_parent_directories(tmp_path):
    path = tmp_path / "a" / "b" / "config.json"
    save_config(Config(demo="x"), path)
    assert path.exists()
    assert load_config(path).demo == "x"


def test_missing_file_gives_default(tmp_path):
    assert load_config(tmp_path / "absent.json") == Config()


def test_corrupt_file_gives_default(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == Config()


def test_non_object_gives_default(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(path) == Config()


def test_bad_field_type_falls_back_and_unknown_keys_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"demo": 5, "other": "x"}', encoding="utf-8")
    assert load_config(path) == Config()


def test_default_path_is_versioned(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    path = default_config_path()
    assert path.is_relative_to(tmp_path)
    assert path.parent.name == f"v{Config.VERSION}"
    assert APP_ID in path.parts


def test_default_path_used_when_none(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    save_config(Config(demo="stored"))
    assert load_config() == Config(demo="stored")