import pytest

from nodelink.config import ConfigurationError, env_bool, env_int, env_seconds, env_str, runtime


def test_env_str_falls_back_to_dotenv_file(tmp_path, monkeypatch):
    dotenv = tmp_path / ".env"
    dotenv.write_text("# comment\nNODELINK_USER_ID='user-from-file'\nBROKEN LINE\n")
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", (dotenv,))
    runtime.reset_default_values()

    assert env_str("NODELINK_USER_ID") == "user-from-file"

    monkeypatch.setenv("NODELINK_USER_ID", "user-from-env")
    assert env_str("NODELINK_USER_ID") == "user-from-env"


def test_env_str_required_missing_raises():
    with pytest.raises(ConfigurationError):
        env_str("NODELINK_USER_ID", required=True)


def test_env_int_parses_and_rejects(monkeypatch):
    monkeypatch.setenv("NODELINK_TEST_INT", "42")
    assert env_int("NODELINK_TEST_INT") == 42

    monkeypatch.setenv("NODELINK_TEST_INT", "4.2")
    with pytest.raises(ConfigurationError):
        env_int("NODELINK_TEST_INT")


@pytest.mark.parametrize("raw,expected", [("yes", True), ("0", False), ("On", True)])
def test_env_bool_values(monkeypatch, raw, expected):
    monkeypatch.setenv("NODELINK_TEST_BOOL", raw)
    assert env_bool("NODELINK_TEST_BOOL") is expected


def test_env_bool_rejects_unknown(monkeypatch):
    monkeypatch.setenv("NODELINK_TEST_BOOL", "maybe")
    with pytest.raises(ConfigurationError):
        env_bool("NODELINK_TEST_BOOL")


def test_env_seconds_uses_fallback_when_unset():
    assert env_seconds("NODELINK_TEST_SECONDS", or_value=3.0) == 3.0
