import pytest

from imgcaption import cli
from imgcaption.client.relay_client import RelayClient
from imgcaption.core.settings import Settings


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-secret")
    monkeypatch.setenv("UPSTREAM_MODEL", "gemini-2.0-flash")
    monkeypatch.setenv("CORS_ALLOW_ORIGIN", "https://example.org")

    cfg = Settings(_env_file=None)

    assert cfg.gemini_api_key.get_secret_value() == "env-secret"
    assert "env-secret" not in repr(cfg)
    assert cfg.upstream_url() == "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    assert cfg.cors_allow_origin == "https://example.org"


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.gemini_api_key is None
    assert cfg.max_image_bytes == 10 * 1024 * 1024
    assert cfg.extra_prompt_max_chars == 128
    assert cfg.translations_file.exists()
    assert cfg.prompt_file.exists()


def test_cli_prints_caption(monkeypatch, tmp_path, png_bytes, capsys):
    async def fake_caption(self, request):
        assert request.contents[0].parts[1].inline_data.mime_type == "image/png"
        return "A dog."

    monkeypatch.setattr(RelayClient, "caption", fake_caption)
    image = tmp_path / "dog.png"
    image.write_bytes(png_bytes)

    assert cli.main([str(image), "--tone", "Funny", "--ui-lang", "en"]) == 0
    assert capsys.readouterr().out.strip() == "A dog."


def test_cli_rejects_unsupported_file(tmp_path, capsys, ctx):
    doc = tmp_path / "notes.txt"
    doc.write_text("hello")

    assert cli.main([str(doc), "--ui-lang", "en"]) == 1
    assert ctx.translations.error_message("en", "errorFormat") in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / "nope.png")]) == 1
    assert "not readable" in capsys.readouterr().err


def test_cli_unknown_tone(tmp_path, png_bytes):
    image = tmp_path / "x.png"
    image.write_bytes(png_bytes)
    with pytest.raises(SystemExit):
        cli.main([str(image), "--tone", "Grumpy", "--ui-lang", "en"])
