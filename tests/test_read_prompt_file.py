import pytest

from prompt_relay import PromptFileError, read_prompt_file


def test_read_prompt_file_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    p = tmp_path / "prompt.md"
    with pytest.raises(PromptFileError) as ei:
        read_prompt_file(str(p))
    assert str(p) in str(ei.value)
    assert str(tmp_path) in str(ei.value)


def test_read_prompt_file_verbatim(tmp_path):
    p = tmp_path / "prompt.md"
    p.write_text("  {{not a template}}\n\n", encoding="utf-8")
    assert read_prompt_file(str(p)) == "  {{not a template}}\n\n"
