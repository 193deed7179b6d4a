"""Naming strategies: map a test's identity to a data file stem."""

from __future__ import annotations

import re
from pathlib import Path

from lokator.errors import ConfigError
from lokator.protocols import NamingStrategy

_TEST_PREFIX_RE = re.compile(r"^[Tt]est(?:_+|(?=[A-Z]))")
_SHOULD_SUFFIX_RE = re.compile(r"_+[Ss]hould(?=[A-Z_]|$).*$")


def _require_name(method_name: str) -> str:
    if method_name is None:
        raise TypeError("method_name must not be None")
    name = method_name.strip()
    if not name:
        raise ValueError("method_name must not be blank")
    return name


class MethodNameStrategy:
    """The data file is named after the test method."""

    def derive_stem(self, method_name: str, class_path: str) -> str:
        return _require_name(method_name)


class ClassQualifiedStrategy:
    """The data file is named ``<ClassName>_<MethodName>``.

    Useful when several test modules in one directory share method names.
    """

    def derive_stem(self, method_name: str, class_path: str) -> str:
        name = _require_name(method_name)
        class_name = Path(class_path).stem if class_path else ""
        return f"{class_name}_{name}" if class_name else name


def _split_scenario(name: str) -> list[str]:
    if "__" in name:
        return name.split("__")
    parts = name.split("_")
    if all(part[:1].isupper() for part in parts):
        return parts
    return [name]


class AssertActArrangeStrategy:
    """Test names follow ``MethodUnderTest_Scenario_ExpectedResult``.

    The stem is the scenario, so every test exercising one scenario reads the
    same file. A leading ``test`` prefix and a trailing ``should`` clause are
    dropped first. Snake-case names separate the three parts with a double
    underscore (``test_parse__empty_file__returns_none`` reads
    ``empty_file``); CamelCase names use single underscores
    (``Parse_EmptyFile_ReturnsNull`` reads ``EmptyFile``). Names that do not
    split into exactly three parts use the stripped name as the stem.
    """

    def derive_stem(self, method_name: str, class_path: str) -> str:
        name = _require_name(method_name)
        stripped = _TEST_PREFIX_RE.sub("", name, count=1)
        stripped = _SHOULD_SUFFIX_RE.sub("", stripped)
        if not stripped:
            return name

        parts = _split_scenario(stripped)
        if len(parts) == 3 and all(parts):
            return parts[1]
        return stripped


NAMING_CONVENTIONS: dict[str, type] = {
    "assert-act-arrange": AssertActArrangeStrategy,
    "method-name": MethodNameStrategy,
    "class-qualified": ClassQualifiedStrategy,
}


def naming_strategy_for(convention: str) -> NamingStrategy:
    try:
        factory = NAMING_CONVENTIONS[convention.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(NAMING_CONVENTIONS))
        raise ConfigError(f"Unknown naming convention '{convention}' (expected one of: {known})") from None
    return factory()


__all__ = [
    "MethodNameStrategy",
    "ClassQualifiedStrategy",
    "AssertActArrangeStrategy",
    "NAMING_CONVENTIONS",
    "naming_strategy_for",
]
