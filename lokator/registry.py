"""Test-suite level registration of the active strategies."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from lokator.config import LokatorSettings
from lokator.coordinator import Coordinator
from lokator.daten import Daten
from lokator.errors import NotInitializedError
from lokator.filesystem import HostDirectory, HostFile
from lokator.identity import TestIdentity
from lokator.log import get_logger
from lokator.naming import naming_strategy_for
from lokator.protocols import FileManagementStrategy, NamingStrategy, OsDirectory, OsFile
from lokator.strategies import SimpleFileManagementStrategy

logger = get_logger(__name__)


class Lokator:
    """Configuration object owned by the test harness.

    Configure the strategies fluently, call ``setup`` once per suite, hand the
    instance to every ``Daten`` and call ``teardown`` at the end::

        lokator = Lokator().using_default_file("defaults.json").setup(project_root)
        text = lokator.daten(TestIdentity("test_parse", __file__)).as_string()
        lokator.teardown()
    """

    def __init__(
        self,
        settings: Optional[LokatorSettings] = None,
        *,
        directory: Optional[OsDirectory] = None,
        file: Optional[OsFile] = None,
    ) -> None:
        self._settings = settings or LokatorSettings()
        self._directory = directory or HostDirectory()
        self._file = file or HostFile()
        self._naming_strategy: NamingStrategy = naming_strategy_for(self._settings.naming_convention)
        self._file_management_strategy: FileManagementStrategy = SimpleFileManagementStrategy(self._directory)
        self._default_file = self._settings.default_file
        self._coordinator: Optional[Coordinator] = None

    @classmethod
    def from_settings(cls, settings: LokatorSettings) -> "Lokator":
        return cls(settings)

    @property
    def settings(self) -> LokatorSettings:
        return self._settings

    @property
    def os_directory(self) -> OsDirectory:
        return self._directory

    @property
    def os_file(self) -> OsFile:
        return self._file

    @property
    def is_setup(self) -> bool:
        return self._coordinator is not None and self._coordinator.is_setup

    @property
    def coordinator(self) -> Coordinator:
        if self._coordinator is None or not self._coordinator.is_setup:
            raise NotInitializedError("The test environment has not yet been initialized. Hint: call Lokator.setup()")
        return self._coordinator

    def using_default_file(self, file_name: str) -> "Lokator":
        self._default_file = file_name or ""
        return self

    def using_naming_convention(self, strategy: NamingStrategy) -> "Lokator":
        if strategy is None:
            raise TypeError("strategy must not be None")
        self._naming_strategy = strategy
        return self

    def using_file_manager(self, strategy: FileManagementStrategy) -> "Lokator":
        if strategy is None:
            raise TypeError("strategy must not be None")
        self._file_management_strategy = strategy
        return self

    def using_settings(self, settings: LokatorSettings) -> "Lokator":
        if settings is None:
            raise TypeError("settings must not be None")
        self._naming_strategy = naming_strategy_for(settings.naming_convention)
        self._settings = settings
        self._default_file = settings.default_file
        return self

    def setup(self, root_directory: Optional[Path] = None) -> "Lokator":
        root = root_directory or self._settings.root_directory or Path.cwd()
        coordinator = Coordinator(
            self._naming_strategy,
            self._file_management_strategy,
            self._settings.as_environment(),
            self._default_file,
            Path(root),
        )
        coordinator.setup()
        self._coordinator = coordinator
        logger.info(
            "Test data locator ready root=%s naming=%s",
            root,
            type(self._naming_strategy).__name__,
        )
        return self

    def teardown(self) -> None:
        if self._coordinator is not None:
            self._coordinator.teardown()

    def daten(self, identity: TestIdentity) -> Daten:
        return Daten(self, identity)


__all__ = ["Lokator"]
