# Configuration for the tests.
# Use `py.test` to run the tests.

# (This file needs to be in or above the directory where py.test is called)

import pytest

def pytest_addoption(parser):
    group = parser.getgroup("battledex")
    group.addoption("--engine", action="store", default=None,
        help="Database URI to test against, instead of the built-in fixture data")

@pytest.fixture(scope="session")
def engine_uri(request, tmp_path_factory):
    """URI of a populated database.  Unless --engine is given, a SQLite file
    is created and filled with battledex.tests.fixtures.
    """
    import battledex.db
    from battledex.tests import fixtures

    uri = request.config.getvalue("engine")
    if uri is None:
        path = tmp_path_factory.mktemp("battledex") / "battledex.sqlite"
        uri = "sqlite:///%s" % path
        session = battledex.db.connect(uri)
        fixtures.populate(session)
        session.remove()
    return uri

@pytest.fixture(scope="module")
def session(request, engine_uri):
    import battledex.db
    session = battledex.db.connect(engine_uri)
    yield session
    session.remove()

@pytest.fixture
def cache():
    from battledex.cache import SnapshotCache
    return SnapshotCache()

@pytest.fixture(scope="module")
def lookup(request, session):
    from battledex.lookup import DexLookup
    return DexLookup(session)
