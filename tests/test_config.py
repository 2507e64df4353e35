from unittest.mock import patch

from quotebot.config import DEFAULT_API_URL, AppConfig


ENV_KEYS = [
	"WIKIQUOTE_API_URL",
	"WIKIQUOTE_USER_AGENT",
	"WIKIQUOTE_TIMEOUT_S",
	"CAPITALIZE_QUERIES",
	"SECTION_RETRIES",
	"LOG_LEVEL",
]


def _clear(monkeypatch):
	for key in ENV_KEYS:
		monkeypatch.delenv(key, raising=False)


@patch("quotebot.config.load_dotenv")
def test_defaults(mock_dotenv, monkeypatch):
	_clear(monkeypatch)
	config = AppConfig.load()
	mock_dotenv.assert_called_once_with(override=False)
	assert config.api_url == DEFAULT_API_URL
	assert config.timeout_s == 10
	assert config.capitalize_queries is True
	assert config.section_retries == 0
	assert config.log_level == "WARNING"


@patch("quotebot.config.load_dotenv")
def test_environment_overrides(mock_dotenv, monkeypatch):
	_clear(monkeypatch)
	monkeypatch.setenv("WIKIQUOTE_API_URL", "https://de.wikiquote.org/w/api.php")
	monkeypatch.setenv("WIKIQUOTE_TIMEOUT_S", "0")
	monkeypatch.setenv("CAPITALIZE_QUERIES", "False")
	monkeypatch.setenv("SECTION_RETRIES", "-3")
	monkeypatch.setenv("LOG_LEVEL", "debug")
	config = AppConfig.load()
	assert config.api_url == "https://de.wikiquote.org/w/api.php"
	assert config.timeout_s == 1
	assert config.capitalize_queries is False
	assert config.section_retries == 0
	assert config.log_level == "DEBUG"
