"""Unit tests for project metadata"""

import re
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent


def test_readme_points_at_project_readme():
    pyproject = (PROJECT_ROOT / "pyproject.toml").read_text(encoding="utf-8")
    match = re.search(r'^readme = "([^"]+)"$', pyproject, re.MULTILINE)

    assert match is not None
    assert match.group(1) == "README.md"
    assert (PROJECT_ROOT / match.group(1)).is_file()
