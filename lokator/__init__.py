"""Lokator - convention-based test data locator.

Finds the data file a test should read from the test's own identity: its
method name and the module that declares it. Files are searched in the
test's asset directory, then in a zip archive standing in for that
directory, then in a shared global directory.

Example:
    from lokator import Lokator, TestIdentity, Using

    lokator = Lokator().using_default_file("customers.json").setup("~/project")

    daten = lokator.daten(TestIdentity("test_totals__empty_cart__is_zero", __file__))
    payload = daten.as_string()          # tests/.daten/test_orders/empty_cart.json
    defaults = daten.as_file_path(Using.DEFAULT_FILE_NAME)

    lokator.teardown()
"""

from lokator.config import LokatorSettings
from lokator.coordinator import Coordinator
from lokator.daten import Daten, Using
from lokator.errors import (
    AmbiguousMatchError,
    ArchiveReadError,
    ConfigError,
    DataFileNotFoundError,
    LokatorError,
    NotInitializedError,
    UnsafeArchiveEntryError,
)
from lokator.identity import TestIdentity
from lokator.naming import AssertActArrangeStrategy, ClassQualifiedStrategy, MethodNameStrategy
from lokator.registry import Lokator
from lokator.strategies import Resolution, SearchLocation, SimpleFileManagementStrategy

__all__ = [
    "Lokator",
    "Daten",
    "Using",
    "TestIdentity",
    "Coordinator",
    "LokatorSettings",
    "SimpleFileManagementStrategy",
    "Resolution",
    "SearchLocation",
    "AssertActArrangeStrategy",
    "MethodNameStrategy",
    "ClassQualifiedStrategy",
    "LokatorError",
    "ConfigError",
    "NotInitializedError",
    "AmbiguousMatchError",
    "DataFileNotFoundError",
    "ArchiveReadError",
    "UnsafeArchiveEntryError",
]
