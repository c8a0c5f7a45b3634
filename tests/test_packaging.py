"""Tests for package discovery settings in pyproject.toml."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")
setuptools = pytest.importorskip("setuptools")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_namespace_subpackages_are_packaged():
    """Blueprints and services ship without __init__.py and must still be found."""
    with PYPROJECT.open("rb") as f:
        find_options = tomllib.load(f)["tool"]["setuptools"]["packages"]["find"]

    assert find_options["namespaces"] is True

    packages = setuptools.find_namespace_packages(
        where=str(PYPROJECT.parent), include=find_options["include"]
    )

    assert "wealth_planner.blueprints" in packages
    assert "wealth_planner.services" in packages
    assert "wealth_planner.models" in packages
