import pytest
from pydantic import ValidationError

from autobib.config import AutobibConfig
from autobib.core.models import BackendKind


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "AUTOBIB_PUBLICATION_DATABASE",
        "AUTOBIB_REQUEST_TIMEOUT_S",
        "AUTOBIB_ENTRY_TYPE",
        "AUTOBIB_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_select_dblp_and_inproceedings():
    config = AutobibConfig()

    assert config.publication_database is BackendKind.DBLP
    assert config.entry_type == "inproceedings"
    assert config.request_timeout_s == 10.0


def test_environment_selects_google_scholar(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("AUTOBIB_PUBLICATION_DATABASE", "Google Scholar")
    monkeypatch.setenv("AUTOBIB_ENTRY_TYPE", "Article")
    monkeypatch.setenv("AUTOBIB_REQUEST_TIMEOUT_S", "3.5")

    config = AutobibConfig()

    assert config.publication_database is BackendKind.GOOGLE_SCHOLAR
    assert config.entry_type == "article"
    assert config.request_timeout_s == 3.5


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("AUTOBIB_PUBLICATION_DATABASE=scholar\n", encoding="utf-8")

    assert AutobibConfig().publication_database is BackendKind.GOOGLE_SCHOLAR


@pytest.mark.parametrize(
    "name, value",
    [
        ("AUTOBIB_PUBLICATION_DATABASE", "Crossref"),
        ("AUTOBIB_ENTRY_TYPE", "misc"),
        ("AUTOBIB_REQUEST_TIMEOUT_S", "0"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch, name: str, value: str):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        AutobibConfig()


def test_build_session_sets_user_agent(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("AUTOBIB_USER_AGENT", "autobib-tests")

    session = AutobibConfig().build_session()

    assert session.headers["User-Agent"] == "autobib-tests"


def test_client_kwargs_carry_timeout_and_base_urls():
    kwargs = AutobibConfig(request_timeout_s=2.0).client_kwargs()

    assert kwargs["timeout"] == 2.0
    assert kwargs["dblp_base_url"].startswith("https://dblp.org")
    assert kwargs["scholar_base_url"].startswith("https://scholar.google.com")
