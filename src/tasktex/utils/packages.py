#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/packages.py
"""Checks of the libraries the parser and the template assembler need.

Results are cached per requirement tuple: a batch conversion checks the
same requirements once per task file.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from functools import lru_cache
from importlib import metadata
from typing import Optional, Tuple

from packaging import version
from packaging.specifiers import SpecifierSet

Requirement = Tuple[str, str, str]


@dataclass(frozen=True)
class DependencyReport:
    """Outcome of checking a set of requirements.

    Parameters
    ----------
    missing : tuple
        (install_name, version_spec) of packages that cannot be imported
    version_mismatches : tuple
        (install_name, version_spec, installed_version) of packages that are too old or too new
    first_import_error : ImportError or None
        The first import failure, kept for exception chaining

    """

    missing: tuple[tuple[str, str], ...] = ()
    version_mismatches: tuple[tuple[str, str, str], ...] = ()
    first_import_error: Optional[ImportError] = None

    @property
    def satisfied(self) -> bool:
        return not self.missing and not self.version_mismatches


def get_package_version(package_name: str) -> Optional[str]:
    """Installed version of a distribution, or None if it is not installed."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> tuple[bool, Optional[str]]:
    """Whether the installed distribution satisfies ``version_spec``.

    Returns
    -------
    tuple
        (meets_requirement, installed_version); an uninstalled distribution
        gives (False, None)

    """
    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None
    return version.parse(installed_version) in SpecifierSet(version_spec), installed_version


@lru_cache(maxsize=None)
def check_dependencies(requirements: tuple[Requirement, ...]) -> DependencyReport:
    """Import each requirement and compare its version.

    Parameters
    ----------
    requirements : tuple of (install_name, import_name, version_spec)
        ``version_spec`` may be empty to accept any version

    Returns
    -------
    DependencyReport
        Missing packages and version mismatches

    """
    missing: list[tuple[str, str]] = []
    mismatches: list[tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in requirements:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue
        if version_spec:
            meets, installed = check_version_requirement(install_name, version_spec)
            if not meets:
                mismatches.append((install_name, version_spec, installed or "unknown"))

    return DependencyReport(tuple(missing), tuple(mismatches), first_error)
