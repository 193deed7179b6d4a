import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lokator import config as config_module
from lokator.strategies import EXTRACTION_DIRECTORY_KEY, SimpleFileManagementStrategy

pytest_plugins = ["lokator.pytest_plugin"]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's own lokator.json and LOKATOR_* variables out of tests."""
    config_home = tmp_path / "config-home"
    monkeypatch.setattr(config_module, "CONFIG_HOME", config_home, raising=False)
    for name in (
        "LOKATOR_CONFIG",
        "LOKATOR_ROOT_DIRECTORY",
        "LOKATOR_GLOBAL_DIRECTORY",
        "LOKATOR_ASSETS_DIRECTORY_NAME",
        "LOKATOR_EXTRACTION_DIRECTORY",
        "LOKATOR_DEFAULT_FILE",
        "LOKATOR_NAMING_CONVENTION",
        "LOKATOR_ARCHIVE_EXTENSION",
    ):
        monkeypatch.delenv(name, raising=False)
    return config_home


@pytest.fixture
def project_root(tmp_path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def extraction_dir(tmp_path) -> Path:
    return tmp_path / "extracted"


@pytest.fixture
def file_manager(project_root, extraction_dir):
    """A file management strategy set up on an empty project with no global directory."""
    strategy = SimpleFileManagementStrategy()
    strategy.setup(project_root, {EXTRACTION_DIRECTORY_KEY: str(extraction_dir)})
    yield strategy
    strategy.teardown()
