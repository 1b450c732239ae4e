from unittest.mock import patch

from shade.config import Settings
from shade.logging_config import setup_logging


def _captured_config(settings: Settings) -> dict:
    with patch("logging.config.dictConfig") as mock_dict_config:
        setup_logging(settings)
    mock_dict_config.assert_called_once()
    return mock_dict_config.call_args.args[0]


def test_rejections_go_to_stderr():
    config = _captured_config(Settings(_env_file=None, KEY="secret"))

    rejections = config["loggers"]["shade.rejections"]
    assert rejections["handlers"] == ["stderr"]
    assert rejections["propagate"] is False
    assert config["handlers"]["stderr"]["stream"] == "ext://sys.stderr"


def test_debug_lowers_level():
    info = _captured_config(Settings(_env_file=None, KEY="secret", DEBUG=False))
    debug = _captured_config(Settings(_env_file=None, KEY="secret", DEBUG=True))

    assert info["loggers"]["shade"]["level"] == "INFO"
    assert debug["loggers"]["shade"]["level"] == "DEBUG"
    assert debug["loggers"]["httpx"]["level"] == "WARNING"
