import pytest
from pydantic import ValidationError

from satdownload.exceptions import ConfigurationError
from satdownload.models.config import RetrievalConfig
from satdownload.storage.config_manager import ConfigManager


def write_ini(path, body: str):
    path.write_text("[DEFAULT]\n" + body, encoding="utf-8")
    return path


def test_defaults(make_config):
    config = make_config()
    assert config.file_extension == "txt"
    assert config.file_num_padding == 6
    assert config.consecutive_mode is True
    assert config.persist_progress is True
    assert config.persist_after_download is True


def test_extension_leading_dot_is_stripped(make_config):
    assert make_config(file_extension=".txt").file_extension == "txt"


def test_required_settings_are_enforced():
    with pytest.raises(ValidationError, match="org_id"):
        RetrievalConfig(username="u", password="p", local_directory="/tmp")


def test_config_is_immutable(make_config):
    config = make_config()
    with pytest.raises(ValidationError):
        config.consecutive_mode = False


def test_model_settings_use_config_dict(make_config):
    assert RetrievalConfig.model_config["frozen"] is True
    assert make_config(org_id="  1234  ").org_id == "1234"


def test_password_is_hidden_from_repr(make_config):
    assert "s3cret" not in repr(make_config())


def test_base_url(make_config):
    config = make_config(scheme="HTTPS", host="scores.example", port=443)
    assert config.base_url == "https://scores.example:443"


def test_load_config_reads_ini_and_strips_quotes(tmp_path):
    ini = write_ini(
        tmp_path / "config.ini",
        'username = "reporting_user"\n'
        "password = 's3cret'\n"
        "org_id = 1234\n"
        "local_directory = /srv/sat/inbound/\n"
        "file_num_padding = 4\n"
        "consecutive_mode = no\n"
        "persist_after_download = false\n",
    )
    config = ConfigManager(ini).load_config()
    assert config.username == "reporting_user"
    assert config.password == "s3cret"
    assert config.file_num_padding == 4
    assert config.consecutive_mode is False
    assert config.persist_after_download is False
    assert config.host == "scoresdownload.collegeboard.org"


def test_cli_options_override_file(tmp_path):
    ini = write_ini(
        tmp_path / "config.ini",
        "username = u\npassword = p\norg_id = 1\nlocal_directory = /tmp/in\n",
    )
    config = ConfigManager(ini).load_config({"persist_progress": False})
    assert config.persist_progress is False


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigManager(tmp_path / "absent.ini").load_config()


def test_invalid_boolean(tmp_path):
    ini = write_ini(
        tmp_path / "config.ini",
        "username = u\npassword = p\norg_id = 1\nlocal_directory = /tmp/in\n"
        "consecutive_mode = maybe\n",
    )
    with pytest.raises(ConfigurationError, match="consecutive_mode"):
        ConfigManager(ini).load_config()


def test_validation_failure_is_configuration_error(tmp_path):
    ini = write_ini(tmp_path / "config.ini", "username = u\n")
    with pytest.raises(ConfigurationError, match="validation failed"):
        ConfigManager(ini).load_config()
