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

"""Remote catalog lookup for storeupdate.

Public API:

- build_lookup_url: Build the lookup URL for an application identifier
- RemoteVersionFetcher: Fetch the published version (single GET, no retry)
- FetchOutcome: Version-or-error value returned by a fetch
- compile_version_path: Validate a JSONPath for the published version
"""

from .catalog import (
    DEFAULT_VERSION_PATH,
    FetchOutcome,
    RemoteVersionFetcher,
    build_lookup_url,
    compile_version_path,
    extract_version,
    make_session,
)

__all__ = [
    "DEFAULT_VERSION_PATH",
    "FetchOutcome",
    "RemoteVersionFetcher",
    "build_lookup_url",
    "compile_version_path",
    "extract_version",
    "make_session",
]
