"""
storeupdate - Is this app behind its store listing?

A small library that tells a host application whether the version it has
installed differs from the version published in an app-distribution
catalog (the iTunes lookup endpoint by default), and how urgent the gap is.

storeupdate provides:
  - A single-request catalog lookup keyed by bundle/package identifier
  - Three-component version parsing that never fails
  - Priority classification: major, minor, patch or none
  - Callback and asyncio interfaces over one check operation
  - Prompt policy helpers for the host's UI layer
  - Optional YAML settings

Quick Start
-----------
    from storeupdate import UpdateChecker, UpdatePriority
    from storeupdate.metadata import StaticMetadata

    checker = UpdateChecker(metadata=StaticMetadata("com.example.app", "1.4.2"))

    # Blocking
    result = checker.resolve()

    # Callback (runs on a worker thread)
    checker.check_for_updates(lambda result: print(result.priority))

    # asyncio
    result = await checker.check_for_updates_async()

Package Structure
-----------------
core : module
    UpdateChecker orchestration and the default instance.
versioning : package
    Version parsing and comparison.
lookup : package
    Catalog lookup URL building and fetching.
metadata : module
    Sources for the installed identifier and version.
policy : package
    Prompt contents per priority and the default result handler.
config : package
    YAML settings loading.

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Compare an installed app version against its store catalog listing"

# Re-export commonly used names for convenience
from storeupdate.config import CheckerSettings, load_settings
from storeupdate.core import (
    UpdateChecker,
    check_for_updates,
    check_for_updates_async,
    default_checker,
    set_default_checker,
)
from storeupdate.results import UpdatePriority, UpdateResult
from storeupdate.versioning import Version, compare_versions, parse_version

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "CheckerSettings",
    "load_settings",
    "UpdateChecker",
    "check_for_updates",
    "check_for_updates_async",
    "default_checker",
    "set_default_checker",
    "UpdatePriority",
    "UpdateResult",
    "Version",
    "compare_versions",
    "parse_version",
]
