"""Pytest configuration shared by the spfx-doctor test suite.

Run pytest from this project's root; pythonpath in pyproject.toml puts
src/ and the tests package helpers (tests.doctor_test_utils) on sys.path.
"""

import pytest

from spfx_doctor.infrastructure.services.rule_registry import RuleRegistryService


@pytest.fixture(scope="session")
def registry() -> RuleRegistryService:
    """The packaged rule registry, loaded once per run."""
    return RuleRegistryService()
