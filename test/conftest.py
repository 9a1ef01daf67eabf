"""
Test Configuration

Environment setup MUST happen before any application import: settings and
the loguru sinks are configured at import time.
"""

import os


def _early_setup_test_environment() -> None:
    os.environ.setdefault('DEBUG', 'true')
    os.environ.setdefault('LOG_TO_FILE', 'false')
    os.environ.setdefault('API_BASE_URL', 'http://museum.test/api/v1')
    os.environ.setdefault('SERVICE_NAME', 'museum-booking-test')


# Call immediately to set env vars before any imports
_early_setup_test_environment()
