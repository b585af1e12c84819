import requests

import prompt_relay.cli as cli
import prompt_relay.config as cfg_mod


def _no_dotenv(monkeypatch, tmp_path):
    monkeypatch.setattr(cfg_mod, "find_dotenv", lambda *a, **k: str(tmp_path / ".env"))


def test_unsupported_model_exits_1(capsys):
    assert cli.main(["gpt-2"]) == 1
    assert "ERROR: model not supported: gpt-2" in capsys.readouterr().err


def test_unknown_flag_exits_1(capsys):
    assert cli.main(["gpt-4.1-2025-04-14", "--nope"]) == 1
    assert "--nope" in capsys.readouterr().err


def test_missing_key_exits_1(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _no_dotenv(monkeypatch, tmp_path)
    assert cli.main(["gpt-4.1-2025-04-14"]) == 1
    assert "OPENAI_API_KEY is not set" in capsys.readouterr().err


def test_missing_prompt_exits_1(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _no_dotenv(monkeypatch, tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "k")
    assert cli.main(["gpt-4.1-2025-04-14", "-q"]) == 1
    assert "prompt.md not found" in capsys.readouterr().err


def test_success_and_http_failure_exit_0(tmp_path, monkeypatch, provider_factory):
    monkeypatch.chdir(tmp_path)
    _no_dotenv(monkeypatch, tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "k")
    (tmp_path / "prompt.md").write_text("Q", encoding="utf-8")

    monkeypatch.setattr(cli, "OpenAIProvider", lambda settings: provider_factory())
    assert cli.main(["gpt-4.1-2025-04-14", "-q"]) == 0
    assert "the answer" in (tmp_path / "prompt.md").read_text(encoding="utf-8")

    monkeypatch.setattr(cli, "OpenAIProvider", lambda settings: provider_factory(status=401, body="nope"))
    assert cli.main(["gpt-4.1-2025-04-14", "-q"]) == 0


def test_network_error_exits_1(tmp_path, monkeypatch, provider_factory, capsys):
    monkeypatch.chdir(tmp_path)
    _no_dotenv(monkeypatch, tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "k")
    (tmp_path / "prompt.md").write_text("Q", encoding="utf-8")
    failing = provider_factory(exc=requests.ConnectionError("unreachable"))
    monkeypatch.setattr(cli, "OpenAIProvider", lambda settings: failing)

    assert cli.main(["gpt-4.1-2025-04-14", "-q"]) == 1
    assert "unreachable" in capsys.readouterr().err
    assert (tmp_path / "prompt.md").read_text(encoding="utf-8") == "Q"
