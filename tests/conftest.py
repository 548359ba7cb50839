import pytest

from db import get_session
from main import create_app
from services.registry import EXTENSION_KEY


@pytest.fixture
def app(tmp_path):
    """App bound to a throwaway SQLite file and staging directory."""
    app = create_app(
        f"sqlite:///{tmp_path / 'contacts.sqlite'}",
        tmp_path / "staging",
        import_dry_run=False,
    )
    app.config.update(TESTING=True)
    yield app
    app.extensions[EXTENSION_KEY].contact_list.close()


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def services(app):
    return app.extensions[EXTENSION_KEY]


@pytest.fixture
def session(app):
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def csv_bytes():
    """Small well-formed contacts file."""
    return (
        "Email,First Name,Last Name,Company,Industry,State\n"
        "ann@acme.com,Ann,Lee,Acme Corp,University,CA\n"
        "bob@other.com,Bob,,Other Inc,School District,NY\n"
        "cy@acme.com,,,Acme Corp,,TX\n"
    ).encode("utf-8")
