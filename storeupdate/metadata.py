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

"""Local application metadata for storeupdate.

An update check needs two facts about the installed application: the
identifier the catalog knows it by, and the version currently installed.
This module defines where those facts come from.

Sources never raise for missing data. A field that cannot be read is
reported as None, and the checker treats that as "no update" rather than
as an error.

Sources:

- StaticMetadata: Values supplied directly by the host
- DistributionMetadata: Installed version of a Python distribution
  (importlib.metadata)
- ManifestMetadata: A small YAML manifest shipped with the application

Example:
    Reading a packaged manifest:
        ```python
        from pathlib import Path
        from storeupdate.metadata import ManifestMetadata

        meta = ManifestMetadata(Path("app_manifest.yaml")).read()
        print(meta.identifier, meta.current_version)
        ```

    Manifest format:

        identifier: com.example.app
        version: 2.4.1
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Protocol

import yaml

from storeupdate.logging import Logger, get_global_logger


@dataclass(frozen=True)
class AppMetadata:
    """Identifier and installed version of the host application.

    Attributes:
        identifier: Bundle/package identifier, or None if unavailable.
        current_version: Installed version string, or None if unavailable.
    """

    identifier: str | None = None
    current_version: str | None = None

    @property
    def complete(self) -> bool:
        return bool(self.identifier) and bool(self.current_version)


class MetadataSource(Protocol):
    """Protocol for local metadata providers."""

    def read(self) -> AppMetadata:
        """Return the current metadata. Must not raise for missing data."""
        ...


def _as_text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


@dataclass(frozen=True)
class StaticMetadata:
    """Metadata supplied directly by the host."""

    identifier: str | None
    current_version: str | None

    def read(self) -> AppMetadata:
        return AppMetadata(
            identifier=_as_text(self.identifier),
            current_version=_as_text(self.current_version),
        )


class DistributionMetadata:
    """Installed version of a Python distribution.

    Args:
        distribution: Distribution name as installed (e.g., "my-app").
        identifier: Catalog identifier. Defaults to the distribution name.
        logger: Optional logger.
    """

    def __init__(
        self,
        distribution: str,
        identifier: str | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.distribution = distribution
        self.identifier = identifier or distribution
        self._logger = logger

    def read(self) -> AppMetadata:
        logger = self._logger or get_global_logger()
        try:
            current = version(self.distribution)
        except PackageNotFoundError:
            logger.verbose(
                "METADATA", f"Distribution not installed: {self.distribution}"
            )
            current = None
        return AppMetadata(
            identifier=_as_text(self.identifier), current_version=_as_text(current)
        )


class ManifestMetadata:
    """Metadata read from a YAML manifest.

    The manifest is read on every call, so a check always sees the file as
    it is on disk. Unreadable manifests yield empty metadata. Values are
    read as the literal text in the file, so an unquoted "version: 1.10"
    is "1.10", never the number 1.1.
    """

    def __init__(
        self,
        path: Path,
        *,
        identifier_key: str = "identifier",
        version_key: str = "version",
        logger: Logger | None = None,
    ) -> None:
        self.path = Path(path)
        self.identifier_key = identifier_key
        self.version_key = version_key
        self._logger = logger

    def read(self) -> AppMetadata:
        logger = self._logger or get_global_logger()
        if not self.path.is_file():
            logger.verbose("METADATA", f"Manifest not found: {self.path}")
            return AppMetadata()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                # BaseLoader keeps scalars as written ("1.10" stays "1.10")
                data = yaml.load(f, Loader=yaml.BaseLoader)
        except (OSError, yaml.YAMLError) as err:
            logger.verbose("METADATA", f"Could not read manifest {self.path}: {err}")
            return AppMetadata()

        if not isinstance(data, dict):
            logger.verbose("METADATA", f"Manifest is not a mapping: {self.path}")
            return AppMetadata()

        return AppMetadata(
            identifier=_as_text(data.get(self.identifier_key)),
            current_version=_as_text(data.get(self.version_key)),
        )
