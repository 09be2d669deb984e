"""Pytest fixtures for unit tests"""
import logbook
import pytest

from tests.unit import data


@pytest.fixture
def report_dir(tmpdir):
    """Directory of Picard reports for two paired end samples"""
    reports = tmpdir.mkdir("reports")
    data.write_samples(reports, ["s1", "s2"])
    return reports


@pytest.fixture
def log_handler():
    with logbook.TestHandler() as handler:
        yield handler
