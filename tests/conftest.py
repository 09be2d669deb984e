"""Pytest fixtures and test helper functions"""


def pytest_configure(config):
    config.addinivalue_line("markers", "speed1: quick tests running the picardqc command line")
