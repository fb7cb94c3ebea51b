"""Tests for configuration loading and credentials."""

import pytest

from grovecast.config import Config, ConfigModel, load_config, save_config


def test_round_trip(tmp_path):
    path = tmp_path / "config.yaml"
    model = ConfigModel(workspace_root=str(tmp_path), audio={"export_format": "M4A"})
    save_config(model, path)

    loaded = load_config(path)
    assert loaded.audio.export_format == "m4a"
    assert loaded.tts.min_call_interval == 1.5
    assert loaded.llm.prompt_cache_ttl == 300.0
    assert loaded.tts.max_chunk_chars == 2000


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path).llm.model == "claude-3-5-sonnet-20241022"


def test_missing_and_invalid_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("audio:\n  export_format: flac\n")
    with pytest.raises(ValueError):
        load_config(bad)


def test_credentials_prefer_environment(tmp_path, monkeypatch):
    model = ConfigModel(llm={"api_key": "from-file"}, tts={"api_key_env": "MY_TTS_KEY"})
    config = Config(config_path=tmp_path / "config.yaml", model=model)

    monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")
    monkeypatch.delenv("MY_TTS_KEY", raising=False)
    credentials = config.get_credentials()
    assert credentials.anthropic_api_key.get_secret_value() == "from-env"
    assert credentials.speechify_api_key is None

    monkeypatch.delenv("ANTHROPIC_API_KEY")
    assert config.get_credentials().anthropic_api_key.get_secret_value() == "from-file"


def test_secrets_are_masked(tmp_path, monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-secret")
    config = Config(config_path=tmp_path / "config.yaml", model=ConfigModel())
    assert "sk-secret" not in repr(config.get_credentials())


def test_episode_folder_is_created(tmp_path):
    config = Config(
        config_path=tmp_path / "cfg" / "config.yaml",
        model=ConfigModel(workspace_root=str(tmp_path / "docs")),
    )
    assert config.episodes_dir == tmp_path / "docs" / "Podcasts"
    assert config.episodes_dir.is_dir()
    assert config.library_path == tmp_path / "cfg" / "library.json"
