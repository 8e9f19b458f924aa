"""Tests for the environment based configuration helper."""

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from hookview.config.lookup_config import LookupConfiguration, parse_env_file


def test_defaults_apply_without_environment(tmp_path) -> None:
    """Every setting has a usable default."""

    config = LookupConfiguration(env_files=[tmp_path / "missing.env"], environ={})

    assert config.get_base_url() == "http://localhost:8080"
    assert config.get_timeout_seconds() == 30.0
    assert config.get_max_response_bytes() == 30 * 1024 * 1024
    assert config.get_resource_types() == [("departures", "Departures"), ("arrivals", "Arrivals")]
    assert config.get_theme() == "flatly"
    assert config.get_log_level() == "INFO"


def test_env_file_values_are_overridden_by_environment(tmp_path) -> None:
    """Process variables win over the .env file."""

    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comentario\n"
        "HOOKVIEW_BASE_URL='https://hooks.example.com/'\n"
        "HOOKVIEW_TIMEOUT_SECONDS=12\n"
        "INVALID LINE\n",
        encoding="utf-8",
    )

    config = LookupConfiguration(env_files=[env_file], environ={"HOOKVIEW_TIMEOUT_SECONDS": "7.5"})

    assert config.get_base_url() == "https://hooks.example.com"
    assert config.get_timeout_seconds() == 7.5


def test_invalid_numbers_fall_back_to_defaults(tmp_path) -> None:
    """Garbage or non-positive numbers are ignored."""

    config = LookupConfiguration(
        env_files=[],
        environ={"HOOKVIEW_TIMEOUT_SECONDS": "abc", "HOOKVIEW_MAX_RESPONSE_BYTES": "-5", "HOOKVIEW_LOG_LEVEL": "debug"},
    )

    assert config.get_timeout_seconds() == LookupConfiguration.DEFAULT_TIMEOUT_SECONDS
    assert config.get_max_response_bytes() == LookupConfiguration.DEFAULT_MAX_RESPONSE_BYTES
    assert config.get_log_level() == "DEBUG"


def test_resource_types_parse_display_names_and_skip_duplicates() -> None:
    """Items without display names are capitalized; repeated values are dropped."""

    config = LookupConfiguration(
        env_files=[],
        environ={"HOOKVIEW_RESOURCE_TYPES": "departures:Salidas, arrivals ,departures:Otra,,vessels:"},
    )

    assert config.get_resource_types() == [
        ("departures", "Salidas"),
        ("arrivals", "Arrivals"),
        ("vessels", "Vessels"),
    ]


def test_parse_env_file_handles_export_quotes_and_comments(tmp_path) -> None:
    """Only well formed assignments are kept, with one level of quotes removed."""

    env_file = tmp_path / "hooks.env"
    env_file.write_text(
        "#HOOKVIEW_THEME=darkly\n"
        "export HOOKVIEW_THEME=\"cosmo\"\n"
        "HOOKVIEW_BASE_URL = http://a=b.test\n"
        "=sin_clave\n"
        "HOOKVIEW_LOG_LEVEL='warning\n",
        encoding="utf-8",
    )

    assert parse_env_file(env_file) == {
        "HOOKVIEW_THEME": "cosmo",
        "HOOKVIEW_BASE_URL": "http://a=b.test",
        "HOOKVIEW_LOG_LEVEL": "'warning",
    }
    assert parse_env_file(tmp_path / "missing.env") == {}


def test_later_env_files_override_earlier_ones(tmp_path) -> None:
    """Files are merged in order before the environment is applied."""

    first = tmp_path / "first.env"
    second = tmp_path / "second.env"
    first.write_text("HOOKVIEW_THEME=darkly\nHOOKVIEW_LOG_LEVEL=debug\n", encoding="utf-8")
    second.write_text("HOOKVIEW_THEME=cosmo\n", encoding="utf-8")

    config = LookupConfiguration(env_files=[first, second], environ={})

    assert config.get_theme() == "cosmo"
    assert config.get_log_level() == "DEBUG"
