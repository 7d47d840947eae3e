"""Pytest configuration file"""

import os

import pytest

os.environ["DJANGO_SETTINGS_MODULE"] = "tests.settings"

import django


def pytest_report_header(config):
    return "Django: " + django.get_version()


def pytest_configure(config):
    django.setup()


@pytest.fixture(params=[False, True], ids=["scan", "indexed"])
def indexed(request):
    return request.param
