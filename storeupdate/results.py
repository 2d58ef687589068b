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

"""Public API return types for storeupdate.

This module defines the values returned by an update check. The
UpdateResult pair is the only output contract of the engine: both the
callback and the awaitable APIs deliver one.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using result types:
        ```python
        from storeupdate import UpdateChecker, UpdatePriority

        result = UpdateChecker().resolve()
        if result.priority is UpdatePriority.MAJOR:
            print("Update required")

        # Results also unpack like a pair
        priority, error = result
        ```

Note:
    Domain types (like Version) stay co-located with their related logic
    in storeupdate.versioning.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class UpdatePriority(str, Enum):
    """Severity of the gap between the installed and catalog versions.

    Names the most significant version component that differs, or NONE
    when the versions match or the check could not be completed.
    """

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    @property
    def needs_update(self) -> bool:
        return self is not UpdatePriority.NONE


@dataclass(frozen=True)
class UpdateResult:
    """Result of a single update check.

    Attributes:
        priority: Which version component differs (NONE if nothing does).
        error: Transport error that stopped the check, if any. A result
            with an error always carries UpdatePriority.NONE.
    """

    priority: UpdatePriority = UpdatePriority.NONE
    error: Exception | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.priority is not UpdatePriority.NONE:
            raise ValueError(
                f"failed checks must report {UpdatePriority.NONE.value!r}, "
                f"got {self.priority.value!r}"
            )

    def __iter__(self) -> Iterator[object]:
        yield self.priority
        yield self.error

    @property
    def failed(self) -> bool:
        return self.error is not None
