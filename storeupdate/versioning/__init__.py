"""
Version parsing and comparison utilities for storeupdate.

This package turns dotted version strings into three-component values and
classifies the difference between an installed and a published version.

Modules
-------
keys : module
    Version value type, parser and comparator.

Public API
----------
Version : dataclass
    Immutable major/minor/patch value (components are strings).
parse_version : function
    Split a dotted string into a Version. Never raises.
compare_versions : function
    Return the UpdatePriority for the first differing component.
compare_version_strings : function
    Convenience wrapper that parses both sides first.

Comparison Rules
----------------
Components are compared by string equality, first match wins:

1. major differs -> MAJOR
2. minor differs -> MINOR
3. patch differs -> PATCH
4. otherwise     -> NONE

Direction is not checked: the comparator answers "do these components
differ", not "is the catalog ahead".

Examples
--------
    >>> from storeupdate.versioning import compare_version_strings
    >>> compare_version_strings("2.0.0", "1.9.9")
    <UpdatePriority.MAJOR: 'major'>
    >>> compare_version_strings("1.2.3", "1.2.3")
    <UpdatePriority.NONE: 'none'>
"""

from .keys import (
    Version,
    compare_version_strings,
    compare_versions,
    parse_version,
)

__all__ = [
    "Version",
    "parse_version",
    "compare_versions",
    "compare_version_strings",
]
