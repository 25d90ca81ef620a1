import fc.checkstatus.logging
import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    # init_logging() configures structlog globally, don't leak that into
    # other tests.
    yield
    structlog.reset_defaults()
    fc.checkstatus.logging._initialized = False
