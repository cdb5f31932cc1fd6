# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""npm flavoured semantic versioning on top of the ``semantic_version`` package"""

import typing as t
from functools import lru_cache

from semantic_version import NpmSpec, Version

__all__ = [
    'NpmSpec',
    'Version',
    'is_valid_range',
    'max_satisfying',
    'parse_range',
    'parse_version',
    'satisfies',
    'sort_versions',
]

# npm treats these as "any version"
ANY_RANGE_ALIASES = ('', 'latest', 'x', 'X')


@lru_cache(maxsize=None)
def parse_version(version: str) -> Version:
    """Parse concrete version, leading "v" and "=" are allowed like in npm"""
    return Version(version.strip().lstrip('=v'))


@lru_cache(maxsize=None)
def parse_range(version_range: str) -> NpmSpec:
    """Parse npm range expression, raises ValueError for invalid ranges"""
    version_range = version_range.strip()
    if version_range in ANY_RANGE_ALIASES:
        version_range = '*'

    return NpmSpec(version_range)


def is_valid_range(version_range: str) -> bool:
    try:
        parse_range(version_range)
    except ValueError:
        return False

    return True


def satisfies(version: str, version_range: str) -> bool:
    try:
        return parse_range(version_range).match(parse_version(version))
    except ValueError:
        return False


def _parsed_versions(versions: t.Iterable[str]) -> t.Dict[Version, str]:
    parsed = {}
    for version in versions:
        try:
            parsed[parse_version(version)] = version
        except ValueError:
            continue

    return parsed


def sort_versions(versions: t.Iterable[str], reverse: bool = False) -> t.List[str]:
    """Sort version strings by semver precedence, invalid versions are dropped"""
    parsed = _parsed_versions(versions)
    return [parsed[v] for v in sorted(parsed, reverse=reverse)]


def max_satisfying(versions: t.Iterable[str], version_range: str) -> t.Optional[str]:
    """Highest version satisfying the range, None if nothing matches"""
    try:
        spec = parse_range(version_range)
    except ValueError:
        return None

    parsed = _parsed_versions(versions)
    best = spec.select(parsed.keys())
    if best is None:
        return None

    return parsed[best]
