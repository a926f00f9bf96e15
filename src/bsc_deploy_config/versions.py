"""Compiler version filtering utilities for bsc-deploy-config library."""

import re
from typing import List, Tuple

import requests

from .constants import SOLC_RELEASES_URL
from .exceptions import CompilerVersionError, ProviderConnectionError

_STABLE_VERSION = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")
_CONSTRAINT = re.compile(r"^(\^|~|>=)?\s*v?(\d+)\.(\d+)\.(\d+)$")


def parse_version(version: str) -> Tuple[int, int, int]:
    """
    Parse a stable semantic version.

    Args:
        version: Version string, e.g. "0.8.19" or "v0.8.19"

    Returns:
        (major, minor, patch)

    Raises:
        CompilerVersionError: If version is not a plain x.y.z release
    """
    match = _STABLE_VERSION.match(version.strip())
    if match is None:
        raise CompilerVersionError(f"Invalid compiler version: '{version}'")
    major, minor, patch = match.groups()
    return (int(major), int(minor), int(patch))


def filter_stable_versions(versions: List[str]) -> List[str]:
    """
    Filter compiler versions to stable releases only.

    Nightly builds and pre-releases (anything with a suffix) are dropped.

    Args:
        versions: List of version strings

    Returns:
        List of stable version strings
    """
    return [v for v in versions if _STABLE_VERSION.match(v.strip())]


def satisfies(version: str, constraint: str) -> bool:
    """
    Check whether a version satisfies a constraint.

    Supported forms:
    - "^x.y.z": compatible, leftmost non-zero component fixed
    - "~x.y.z": same major and minor
    - ">=x.y.z": at least this version
    - "x.y.z": exact

    All three version components are required; partial constraints such as
    "^0.8" are rejected.

    Args:
        version: Stable version string
        constraint: Constraint string

    Returns:
        True if version matches

    Raises:
        CompilerVersionError: If either argument is malformed
    """
    match = _CONSTRAINT.match(constraint.strip())
    if match is None:
        raise CompilerVersionError(f"Invalid compiler version constraint: '{constraint}'")

    operator, major, minor, patch = match.groups()
    lower = (int(major), int(minor), int(patch))
    current = parse_version(version)

    if current < lower:
        return False

    match operator:
        case "^":
            if lower[0] != 0:
                return current[0] == lower[0]
            if lower[1] != 0:
                return current[:2] == lower[:2]
            return current == lower
        case "~":
            return current[:2] == lower[:2]
        case ">=":
            return True
        case _:
            return current == lower


def resolve_compiler_version(available: List[str], constraint: str) -> str:
    """
    Pick the newest stable version matching a constraint.

    Args:
        available: Candidate versions (any order, may include nightlies)
        constraint: Constraint string, e.g. "^0.8.0"

    Returns:
        Highest matching version

    Raises:
        CompilerVersionError: If nothing matches
    """
    candidates = [
        v for v in filter_stable_versions(available) if satisfies(v, constraint)
    ]
    if not candidates:
        raise CompilerVersionError(
            f"No compiler release satisfies '{constraint}'"
        )
    return max(candidates, key=parse_version)


def fetch_solc_releases(url: str = SOLC_RELEASES_URL, timeout: int = 30) -> List[str]:
    """
    Download the list of published solc releases.

    Args:
        url: Release list URL (soliditylang list.json format)
        timeout: HTTP timeout in seconds

    Returns:
        List of release version strings

    Raises:
        ProviderConnectionError: If the list cannot be downloaded
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ProviderConnectionError(f"Network error fetching solc releases: {e}") from e

    if response.status_code != 200:
        raise ProviderConnectionError(
            f"Fetching solc releases failed with status {response.status_code}"
        )

    try:
        data = response.json()
    except ValueError as e:
        raise ProviderConnectionError("Solc release list is not valid JSON") from e

    return list(data.get("releases", {}).keys())
