"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['SCANSPLIT_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # The extractor warns on every skipped region; tests trigger that on purpose
    for logger_name in ['scansplit.regions.extraction', 'scansplit.pipeline']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
