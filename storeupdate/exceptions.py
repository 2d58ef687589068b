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

"""Exception hierarchy for storeupdate.

This module defines the exceptions that library users can see:

- ConfigError: Settings-file errors (YAML parse, wrong types, missing file)
  and invalid fetcher configuration (a bad version_path JSONPath)
- NetworkError: Transport failures while calling the catalog lookup endpoint

All exceptions inherit from StoreUpdateError, allowing users to catch all
storeupdate errors with a single except clause if needed.

Note that an update check never raises. A NetworkError is delivered inside
UpdateResult.error rather than thrown, and data problems (missing metadata,
malformed payloads) are reported as "no update" without any error at all.

Example:
    Inspecting a failed check:
        ```python
        from storeupdate import UpdateChecker
        from storeupdate.exceptions import NetworkError

        result = UpdateChecker().resolve()
        if isinstance(result.error, NetworkError):
            print(f"Catalog unreachable: {result.error}")
        ```

    Loading settings:
        ```python
        from storeupdate.config import load_settings
        from storeupdate.exceptions import ConfigError

        try:
            settings = load_settings(Path("storeupdate.yaml"))
        except ConfigError as e:
            print(f"Config error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "StoreUpdateError",
    "ConfigError",
    "NetworkError",
]


class StoreUpdateError(Exception):
    """Base exception for all storeupdate errors.

    All storeupdate-specific exceptions inherit from this class, allowing
    users to catch all of them with a single except clause if needed.
    """

    pass


class ConfigError(StoreUpdateError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Settings values of the wrong type
    - Missing settings files
    - An invalid version_path JSONPath given to RemoteVersionFetcher

    It is only raised while building settings or collaborators, never during
    an update check.
    """

    pass


class NetworkError(StoreUpdateError):
    """Reported for transport failures against the catalog.

    Covers connection failures, timeouts, HTTP error statuses and requests
    aborted because the host closed the underlying session. The original
    requests exception is available as ``__cause__``.

    Example:
        ```python
        result = checker.resolve()
        if isinstance(result.error, NetworkError):
            print(result.error.__cause__)
        ```
    """

    pass
