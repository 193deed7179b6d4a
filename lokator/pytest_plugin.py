"""pytest integration.

Enable it from a ``conftest.py``::

    pytest_plugins = ["lokator.pytest_plugin"]

and read each test's data through the ``daten`` fixture::

    def test_parse__empty_file__returns_none(daten):
        assert parse(daten.as_string()) is None
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from lokator.config import LokatorSettings
from lokator.daten import Daten
from lokator.identity import TestIdentity
from lokator.log import configure_logging, level_for_verbosity
from lokator.registry import Lokator

_INI_OPTIONS = {
    "lokator_root": "Root directory for test data lookups (default: pytest rootdir)",
    "lokator_assets_directory": "Name of the asset folder beside each test module",
    "lokator_global_directory": "Shared directory searched after the per-test locations",
    "lokator_default_file": "File returned for Using.DEFAULT_FILE_NAME",
    "lokator_naming": "Naming convention: assert-act-arrange, method-name, class-qualified",
    "lokator_log_level": "Log threshold: debug, info, warning, error (default: from -v, warning without it)",
}


def pytest_addoption(parser: pytest.Parser) -> None:
    for name, help_text in _INI_OPTIONS.items():
        parser.addini(name, help_text, default="")


def pytest_configure(config: pytest.Config) -> None:
    level = config.getini("lokator_log_level") or level_for_verbosity(config.getoption("verbose"))
    configure_logging(level)


def _settings_from_ini(config: pytest.Config) -> LokatorSettings:
    settings = LokatorSettings.load()
    overrides: dict[str, object] = {}
    root = config.getini("lokator_root")
    overrides["root_directory"] = config.rootpath / root if root else config.rootpath
    if config.getini("lokator_assets_directory"):
        overrides["assets_directory_name"] = config.getini("lokator_assets_directory")
    if config.getini("lokator_global_directory"):
        overrides["global_directory"] = config.rootpath / config.getini("lokator_global_directory")
    if config.getini("lokator_default_file"):
        overrides["default_file"] = config.getini("lokator_default_file")
    if config.getini("lokator_naming"):
        overrides["naming_convention"] = config.getini("lokator_naming")
    return settings.model_copy(update=overrides)


@pytest.fixture(scope="session")
def lokator_settings(pytestconfig: pytest.Config) -> LokatorSettings:
    return _settings_from_ini(pytestconfig)


@pytest.fixture(scope="session")
def lokator(lokator_settings: LokatorSettings) -> Iterator[Lokator]:
    instance = Lokator.from_settings(lokator_settings)
    instance.setup(Path(lokator_settings.root_directory))
    yield instance
    instance.teardown()


@pytest.fixture
def daten(lokator: Lokator, request: pytest.FixtureRequest) -> Daten:
    return lokator.daten(TestIdentity.from_pytest_request(request))
