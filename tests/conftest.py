import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config environment before the domain is imported and initialized.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("PAYMENT_GATEWAY", "fake")
    os.environ.setdefault("IDENTITY_PROVIDER", "fake")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def cargo_bed():
    import cargo.api  # noqa: F401  # load the api package before domain traversal
    from cargo.domain import cargo

    bed = DomainFixture(cargo)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session", autouse=True)
def setup_db(cargo_bed):
    from cargo.domain import cargo
    from cargo.utils.db import drop_db, setup_db

    setup_db(cargo)

    yield

    drop_db(cargo)


@pytest.fixture(autouse=True)
def _ctx(cargo_bed):
    with cargo_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Fixture to automatically cleanup infrastructure after every test"""
    from cargo.provider import reset_identity_provider
    from cargo.gateway import reset_gateway

    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    reset_gateway()
    reset_identity_provider()
