from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class TestIdentity:
    """The currently executing test, as passed in by the harness.

    ``source_file_path`` is the file that declared the test. Its directory is
    where the test's assets live and its stem stands in for the class name.
    """

    __test__ = False

    method_name: str
    source_file_path: str

    def __post_init__(self) -> None:
        if self.method_name is None:
            raise TypeError("method_name must not be None")
        if self.source_file_path is None:
            raise TypeError("source_file_path must not be None")
        # Path objects are accepted but stored as strings
        object.__setattr__(self, "source_file_path", str(self.source_file_path))

    @property
    def source_directory(self) -> Path:
        return Path(self.source_file_path).parent

    @property
    def class_name(self) -> str:
        return Path(self.source_file_path).stem

    @classmethod
    def from_pytest_request(cls, request: Any) -> "TestIdentity":
        """Build the identity of the test that requested a fixture."""
        node = request.node
        method_name = getattr(node, "originalname", None) or node.name
        return cls(method_name=method_name, source_file_path=str(request.path))


__all__ = ["TestIdentity"]
