"""Tests for YAML settings loading."""

from pathlib import Path

import pytest

from pricing_validation.config import Settings, load_settings


def test_missing_file_yields_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.yaml")

    assert settings == Settings()
    assert settings.report_dir == Path("reports")
    assert settings.mcp_port == 8765


def test_full_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "data_file: data/prices.csv\n"
        "report_dir: out\n"
        "report_format: Markdown\n"
        "mcp_host: 0.0.0.0\n"
        "mcp_port: '9001'\n",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.data_file == Path("data/prices.csv")
    assert settings.report_dir == Path("out")
    assert settings.report_format == "markdown"
    assert settings.mcp_host == "0.0.0.0"
    assert settings.mcp_port == 9001


def test_empty_file_yields_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == Settings()


@pytest.mark.parametrize(
    "content, message",
    [
        ("report_format: pdf\n", "Unsupported report_format"),
        ("mcp_port: eighty\n", "Invalid mcp_port"),
        ("- just\n- a list\n", "must contain a mapping"),
        ("data_file: [unclosed\n", "Failed to parse settings file"),
    ],
)
def test_invalid_files(tmp_path, content, message):
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        load_settings(path)


def test_bundled_settings_file_is_valid():
    """Meta-test: the example settings shipped with the repo must load."""
    path = Path(__file__).parent.parent / "config" / "settings.yaml"
    settings = load_settings(path)
    assert settings.report_format == "text"
