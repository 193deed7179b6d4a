from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from lokator.errors import NotInitializedError
from lokator.log import get_logger
from lokator.protocols import FileManagementStrategy, NamingStrategy
from lokator.strategies import Resolution

logger = get_logger(__name__)


class Coordinator:
    """Binds a naming strategy to a file management strategy.

    Resolution is refused until ``setup`` has succeeded. ``teardown`` releases
    the file management strategy but keeps both strategies bound, so the same
    coordinator can be set up again for the next run.
    """

    def __init__(
        self,
        naming_strategy: NamingStrategy,
        file_management_strategy: FileManagementStrategy,
        environment_settings: Optional[Mapping[str, object]] = None,
        default_file_name: Optional[str] = None,
        root_directory: Optional[Path] = None,
    ) -> None:
        if naming_strategy is None:
            raise TypeError("naming_strategy must not be None")
        if file_management_strategy is None:
            raise TypeError("file_management_strategy must not be None")
        self._naming_strategy = naming_strategy
        self._file_management_strategy = file_management_strategy
        self._environment_settings = dict(environment_settings or {})
        self._default_file_name = default_file_name or ""
        self._root_directory = Path(root_directory) if root_directory is not None else Path.cwd()
        self._is_setup = False

    @property
    def is_setup(self) -> bool:
        return self._is_setup

    @property
    def naming_strategy(self) -> NamingStrategy:
        return self._naming_strategy

    @property
    def file_management_strategy(self) -> FileManagementStrategy:
        return self._file_management_strategy

    @property
    def default_file_name(self) -> str:
        return self._default_file_name

    def setup(self, root_directory: Optional[Path] = None) -> None:
        if root_directory is not None:
            self._root_directory = Path(root_directory)
        self._is_setup = False
        self._file_management_strategy.setup(self._root_directory, self._environment_settings)
        self._is_setup = True
        logger.debug("Coordinator ready root=%s", self._root_directory)

    def teardown(self) -> None:
        self._is_setup = False
        self._file_management_strategy.teardown()

    def get_file_path(self, file_name: str, source_path: str, *, use_naming_convention: bool = True) -> Resolution:
        self._require_setup()
        naming = self._naming_strategy if use_naming_convention else None
        return self._file_management_strategy.get_file_path(naming, file_name, source_path)

    def get_default_file_path(self) -> Resolution:
        self._require_setup()
        return self._file_management_strategy.get_default_file_path(self._default_file_name)

    def _require_setup(self) -> None:
        if not self._is_setup:
            raise NotInitializedError(
                f"The {type(self).__name__} has not been initialized. Hint: call setup()"
            )


__all__ = ["Coordinator"]
