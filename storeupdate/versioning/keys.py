# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core version parsing and comparison for storeupdate.

This module is format-agnostic: it does NOT touch the network or read files.
It only splits dotted version strings into three components and reports
which component differs between two of them.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeupdate.results import UpdatePriority

# ----------------------------
# Shared DTO
# ----------------------------


@dataclass(frozen=True)
class Version:
    """Three-component version value.

    Components are kept as strings. They are never converted to numbers,
    so "09" and "9" are different components.

    Attributes:
        major: First dot-delimited segment ("" if the input was empty).
        minor: Second segment, or the last one for short versions.
        patch: Last segment of a 3+ segment version, else "0".

    """

    major: str
    minor: str
    patch: str

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


# ----------------------------
# Parsing
# ----------------------------

_DEFAULT_PATCH = "0"


def _segments(version_string: str) -> list[str]:
    """Split on dots, dropping empty segments ("1..2." -> ["1", "2"])."""
    return [part for part in version_string.split(".") if part]


def parse_version(version_string: str | None) -> Version:
    """Parse a dotted version string into a Version.

    Rules:
      - major is the first segment, or "" when there is none.
      - fewer than 3 segments: minor is the LAST segment (so "1" gives
        minor "1") and patch defaults to "0".
      - 3 or more segments: minor is the second segment and patch is the
        last one; anything in between is ignored.

    Never raises. Malformed input degrades to empty components.

    Example:
        >>> parse_version("1.2")
        Version(major='1', minor='2', patch='0')
        >>> parse_version("1.2.3.4")
        Version(major='1', minor='2', patch='4')
    """
    if not isinstance(version_string, str):
        version_string = ""
    parts = _segments(version_string)

    major = parts[0] if parts else ""
    if len(parts) < 3:
        minor = parts[-1] if parts else ""
        return Version(major=major, minor=minor, patch=_DEFAULT_PATCH)
    return Version(major=major, minor=parts[1], patch=parts[-1])


# ----------------------------
# Comparison
# ----------------------------


def compare_versions(new: Version, current: Version) -> UpdatePriority:
    """Report the most significant component that differs.

    This is a presence check, not an ordering: any difference counts, so a
    current version that is ahead of 'new' is still reported at its tier.

    Args:
        new: Version published in the catalog.
        current: Version installed locally.

    Returns:
        MAJOR, MINOR or PATCH for the first differing component, else NONE.
    """
    if new.major != current.major:
        return UpdatePriority.MAJOR
    if new.minor != current.minor:
        return UpdatePriority.MINOR
    if new.patch != current.patch:
        return UpdatePriority.PATCH
    return UpdatePriority.NONE


def compare_version_strings(new: str | None, current: str | None) -> UpdatePriority:
    """Parse both strings and compare them (see compare_versions)."""
    return compare_versions(parse_version(new), parse_version(current))
