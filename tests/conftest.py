"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local idegateway package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of idegateway modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("idegateway"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Keep structlog/stdlib configuration from leaking between tests."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
