import pytest

from common import Settings
from common.config import DEFAULT_FIELD_PREFIXES, parse_flag


ENV_KEYS = (
    "BUILDERGEN_CREATE_BUILDER_CONSTRUCTOR",
    "BUILDERGEN_CREATE_STATIC_WITH_METHODS",
    "BUILDERGEN_FORMAT_SOURCE",
    "BUILDERGEN_FIELD_PREFIXES",
    "BUILDERGEN_FORMATTER_CMD",
    "BUILDERGEN_FORMATTER_URL",
    "BUILDERGEN_FORMATTER_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    settings = Settings.from_env()

    assert settings.create_static_with_methods
    assert not settings.create_builder_constructor
    assert settings.format_source
    assert settings.field_prefixes == DEFAULT_FIELD_PREFIXES
    assert settings.formatter_command is None
    assert settings.formatter_timeout == 10.0


def test_env_file_values_are_loaded(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "BUILDERGEN_CREATE_BUILDER_CONSTRUCTOR=on\n"
        "BUILDERGEN_FORMATTER_CMD=google-java-format -\n"
        "BUILDERGEN_FORMATTER_TIMEOUT=2.5\n"
        "BUILDERGEN_FIELD_PREFIXES=\n",
        encoding="utf-8",
    )

    settings = Settings.from_env(env_files=[str(env_file), str(tmp_path / "missing.env")])

    assert settings.create_builder_constructor
    assert settings.formatter_command == "google-java-format -"
    assert settings.formatter_timeout == 2.5
    assert settings.field_prefixes == DEFAULT_FIELD_PREFIXES


def test_process_environment_wins_over_env_file(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("BUILDERGEN_FORMAT_SOURCE=false\nBUILDERGEN_FORMATTER_URL=http://fmt.local\n", encoding="utf-8")
    monkeypatch.setenv("BUILDERGEN_FORMAT_SOURCE", "true")
    monkeypatch.setenv("BUILDERGEN_FIELD_PREFIXES", "_, s ,")

    settings = Settings.from_env(env_files=[str(env_file)])

    assert settings.format_source
    assert settings.formatter_url == "http://fmt.local"
    assert settings.field_prefixes == ("_", "s")


@pytest.mark.parametrize(
    ("value", "default", "expected"),
    [
        ("YES", False, True),
        (" 0 ", True, False),
        ("off", True, False),
        ("maybe", True, True),
        (None, False, False),
    ],
)
def test_parse_flag(value, default, expected) -> None:
    assert parse_flag(value, default) is expected
