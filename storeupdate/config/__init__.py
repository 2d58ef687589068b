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

"""Settings loading for storeupdate.

Settings are built-in defaults optionally overridden by a YAML file. Dicts
are merged recursively and lists/scalars are replaced (last wins).

Public API:

- load_settings: Load the effective settings
- CheckerSettings: Frozen settings value consumed by UpdateChecker

Example:
    Basic usage:

        from pathlib import Path
        from storeupdate.config import load_settings

        settings = load_settings(Path("storeupdate.yaml"))
        print(settings.endpoint)

"""

from .loader import DEFAULT_LOOKUP_ENDPOINT, CheckerSettings, load_settings

__all__ = ["CheckerSettings", "DEFAULT_LOOKUP_ENDPOINT", "load_settings"]
