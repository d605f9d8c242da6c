from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import re
import tomllib
from pathlib import Path

from censored_distributions import __version__


def test_version_pep440() -> None:
    assert re.match(
        r"^\d+!\d+(\.\d+)*([abc]|rc)?\d*(\.post\d+)?(\.dev\d+)?$|^\d+(\.\d+)*([abc]|rc)?\d*(\.post\d+)?(\.dev\d+)?$",
        __version__,
    )


def test_public_api_exports_censoring() -> None:
    import censored_distributions as cd

    for name in ("primary_censored", "interval_censored", "double_interval_censored", "get_dist"):
        assert name in cd.__all__
        assert callable(getattr(cd, name))


def test_project_metadata_has_no_design_notes_as_readme() -> None:
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    project = tomllib.loads(pyproject.read_text(encoding="utf-8"))["project"]

    assert project.get("readme") != "DESIGN.md"
    assert project["name"] == "censored-distributions"
