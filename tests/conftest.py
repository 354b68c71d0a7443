"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local covbadge package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of covbadge modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("covbadge"):
        del sys.modules[module_name]


LCOV_SAMPLE = """TN:
SF:src/app/main.py
FN:3,main
FN:10,helper
FNDA:1,main
FNDA:0,helper
FNF:2
FNH:1
DA:3,1
DA:4,0
DA:5,0
DA:7,0
DA:8,1
LF:10
LH:7
BRDA:4,0,0,1
BRDA:4,0,1,0
BRDA:9,0,0,-
BRF:4
BRH:2
end_of_record
SF:setup.py
FNF:0
FNH:0
LF:4
LH:4
BRF:0
BRH:0
end_of_record
"""

HTML_INDEX_SAMPLE = """<!doctype html>
<html><body>
<div class='fl pad1y space-right2'>
    <span class="strong">80% </span>
    <span class="quiet">Statements</span>
    <span class='fraction'>8/10</span>
</div>
<div class='fl pad1y space-right2'>
    <span class="strong">50% </span>
    <span class="quiet">Branches</span>
    <span class='fraction'>2/4</span>
</div>
<div class='fl pad1y space-right2'>
    <span class="strong">100% </span>
    <span class="quiet">Functions</span>
    <span class='fraction'>3/3</span>
</div>
<div class='fl pad1y space-right2'>
    <span class="strong">90% </span>
    <span class="quiet">Lines</span>
    <span class='fraction'>9/10</span>
</div>
</body></html>
"""


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep the user's global config and COVBADGE__ env vars out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("COVBADGE__"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(
        "covbadge.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global-config.yaml"
    )
    yield


@pytest.fixture
def lcov_sample() -> str:
    return LCOV_SAMPLE


@pytest.fixture
def html_index_sample() -> str:
    return HTML_INDEX_SAMPLE


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project folder with every coverage artifact and a pyproject.toml."""
    root = tmp_path / "project"
    coverage = root / "coverage"
    (coverage / "lcov-report").mkdir(parents=True)
    (coverage / "lcov.info").write_text(LCOV_SAMPLE)
    (coverage / "coverage-summary.json").write_text(
        '{"total": {"lines": {"total": 14, "covered": 11, "skipped": 0, "pct": 78.57}}}'
    )
    (coverage / "lcov-report" / "index.html").write_text(HTML_INDEX_SAMPLE)
    (root / "pyproject.toml").write_text(
        '[project]\nname = "demo"\nversion = "1.2.3"\n\n'
        '[project.urls]\nRepository = "https://github.com/example/demo.git"\n'
    )
    return root
