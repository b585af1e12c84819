import pytest

from prompt_relay import ConfigError, load_config
import prompt_relay.config as cfg_mod


def test_load_config_reads_dotenv(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OPENAI_API_KEY=dot-env-key\nOPENAI_TIMEOUT=42\n")
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: str(env_file))

    cfg = load_config()
    assert cfg.api_key == "dot-env-key"
    assert cfg.timeout == 42
    assert cfg.base_url == "https://api.openai.com/v1"


def test_load_config_finds_env_in_parent(tmp_path, monkeypatch):
    root = tmp_path / "proj"
    sub = root / "a" / "b"
    sub.mkdir(parents=True)
    (root / ".env").write_text("OPENAI_API_KEY=parent-key\nOPENAI_BASE_URL=https://proxy.example/v1\n")
    monkeypatch.chdir(sub)
    # force the fallback walk up the directory tree
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: "")

    cfg = load_config()
    assert cfg.api_key == "parent-key"
    assert cfg.base_url == "https://proxy.example/v1"


def test_missing_key_is_fatal(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: str(tmp_path / ".env"))
    with pytest.raises(ConfigError) as ei:
        load_config()
    assert "OPENAI_API_KEY" in str(ei.value)


def test_legacy_variable_name(tmp_path, monkeypatch):
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: str(tmp_path / ".env"))
    monkeypatch.setenv("openai", "legacy-key")
    assert load_config().api_key == "legacy-key"


def test_invalid_timeout_falls_back(tmp_path, monkeypatch):
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: str(tmp_path / ".env"))
    monkeypatch.setenv("OPENAI_API_KEY", "k")
    monkeypatch.setenv("OPENAI_TIMEOUT", "soon")
    assert load_config().timeout == 300
