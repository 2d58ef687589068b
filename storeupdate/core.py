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

"""Core orchestration for storeupdate.

This module provides UpdateChecker, which ties the pieces of an update
check together: local metadata, the catalog lookup, version parsing and
comparison.

One Operation, Two Interfaces:

- **resolve()** is the single core operation. It runs synchronously and
    always returns an UpdateResult; it never raises for network or data
    problems.
- **check_for_updates(completion)** runs resolve() on a worker thread and
    calls ``completion(result)`` exactly once.
- **check_for_updates_async(show_default_alert)** awaits the callback form
    through an asyncio future, resuming the caller exactly once.

Both interfaces call resolve() the same way, so identical inputs give
identical results.

Check Flow:

1. Read identifier and installed version from the metadata source
2. Build the lookup URL (missing data or no URL -> NONE, no error)
3. Fetch the published version (one request, no retry)
4. Transport error -> (NONE, error)
5. No published version -> (NONE, no error)
6. Compare published vs installed -> (priority, no error)

Design Principles:

- Collaborators (metadata, fetcher, result handler) are injected; every one
  has a default so simple hosts can use the module-level functions
- No state survives between checks; concurrent checks are independent and
  each issues its own request
- Nothing here draws UI; presentation is the result handler's job

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from storeupdate import UpdateChecker, UpdatePriority
        from storeupdate.metadata import StaticMetadata

        checker = UpdateChecker(metadata=StaticMetadata("com.example.app", "2.4.0"))
        result = checker.resolve()
        if result.priority is UpdatePriority.MAJOR:
            print("Update required")
        ```

    Awaitable form:
        ```python
        result = await checker.check_for_updates_async(show_default_alert=True)
        ```

"""

from __future__ import annotations

import asyncio
from pathlib import Path
import threading

from storeupdate.config.loader import CheckerSettings, load_settings
from storeupdate.logging import Logger, get_global_logger
from storeupdate.lookup import RemoteVersionFetcher, build_lookup_url
from storeupdate.metadata import ManifestMetadata, MetadataSource
from storeupdate.policy import ResultHandler, make_log_handler
from storeupdate.results import UpdateResult
from storeupdate.versioning import compare_versions, parse_version

DEFAULT_MANIFEST_PATH = Path("app_manifest.yaml")


class UpdateChecker:
    """Checks whether the installed application is behind the catalog.

    Args:
        metadata: Source of the identifier and installed version. Defaults
            to ManifestMetadata(DEFAULT_MANIFEST_PATH).
        fetcher: Catalog fetcher. Defaults to a RemoteVersionFetcher built
            from 'settings'.
        settings: Effective settings. Defaults to CheckerSettings().
        result_handler: Handler used when check_for_updates() gets no
            completion, and by check_for_updates_async(show_default_alert=True).
            Defaults to a handler that reports the prompt through the logger.
        logger: Logger for this checker. Defaults to the global logger.
    """

    def __init__(
        self,
        metadata: MetadataSource | None = None,
        fetcher: RemoteVersionFetcher | None = None,
        settings: CheckerSettings | None = None,
        result_handler: ResultHandler | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.settings = settings or CheckerSettings()
        self._logger = logger
        self.metadata = metadata or ManifestMetadata(DEFAULT_MANIFEST_PATH, logger=logger)
        self.fetcher = fetcher or RemoteVersionFetcher(
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
            logger=logger,
        )
        self.result_handler = result_handler or make_log_handler(
            title=self.settings.prompt_title,
            message=self.settings.prompt_message,
            logger=logger,
        )

    @classmethod
    def from_settings_file(cls, path: Path, **kwargs) -> UpdateChecker:
        """Build a checker from a YAML settings file (see load_settings).

        Raises:
            ConfigError: If the settings file is missing or invalid.
        """
        settings = load_settings(path, logger=kwargs.get("logger"))
        return cls(settings=settings, **kwargs)

    @property
    def logger(self) -> Logger:
        return self._logger or get_global_logger()

    def resolve(self) -> UpdateResult:
        """Run one update check and return its result.

        Returns:
            UpdateResult. The priority is NONE whenever local metadata is
            missing, the catalog has no usable version, or the transport
            failed; only the last case carries an error.
        """
        logger = self.logger

        meta = self.metadata.read()
        lookup_url = build_lookup_url(meta.identifier, self.settings.endpoint)
        if not meta.current_version or lookup_url is None:
            logger.verbose(
                "CHECK",
                "Local metadata incomplete "
                f"(identifier={meta.identifier!r}, version={meta.current_version!r}); "
                "no update",
            )
            return UpdateResult()

        current = parse_version(meta.current_version)
        logger.verbose("CHECK", f"Installed version: {current} ({meta.identifier})")

        outcome = self.fetcher.fetch(lookup_url)
        if outcome.error is not None:
            return UpdateResult(error=outcome.error)
        if outcome.version is None:
            logger.verbose("CHECK", "Catalog has no version for this app; no update")
            return UpdateResult()

        published = parse_version(outcome.version)
        priority = compare_versions(new=published, current=current)
        logger.verbose(
            "CHECK", f"Published {published} vs installed {current}: {priority.value}"
        )
        return UpdateResult(priority)

    def _run(self, completion: ResultHandler) -> None:
        try:
            result = self.resolve()
        except Exception as err:
            # A host-supplied collaborator broke its contract; still complete once
            self.logger.warning("CHECK", f"Update check aborted: {err!r}")
            result = UpdateResult(error=err)
        completion(result)

    def check_for_updates(
        self, completion: ResultHandler | None = None
    ) -> threading.Thread:
        """Start an update check and report the result through a callback.

        The check runs on a daemon worker thread and 'completion' is called
        exactly once, on that thread.

        Args:
            completion: Receives the UpdateResult. Defaults to the
                checker's result handler.

        Returns:
            The started worker thread (join it to wait for completion).
        """
        handler = completion or self.result_handler
        worker = threading.Thread(
            target=self._run,
            args=(handler,),
            name="storeupdate-check",
            daemon=True,
        )
        worker.start()
        return worker

    async def check_for_updates_async(
        self, show_default_alert: bool = False
    ) -> UpdateResult:
        """Await an update check.

        Wraps check_for_updates() in a single asyncio future that the worker
        thread resolves through the running loop. There is no cancellation
        token: cancelling the awaiting task does not stop the request.

        Args:
            show_default_alert: If True, pass the result to the checker's
                result handler before returning.

        Returns:
            The UpdateResult of the check.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[UpdateResult] = loop.create_future()

        def _settle(result: UpdateResult) -> None:
            if not future.done():
                future.set_result(result)

        def _resume(result: UpdateResult) -> None:
            loop.call_soon_threadsafe(_settle, result)

        self.check_for_updates(_resume)
        result = await future

        if show_default_alert:
            self.result_handler(result)
        return result


# -------------------------------
# Convenience default instance
# -------------------------------

_default_checker: UpdateChecker | None = None
_default_lock = threading.Lock()


def default_checker() -> UpdateChecker:
    """Return the shared convenience checker, creating it on first use.

    The default instance reads DEFAULT_MANIFEST_PATH and uses default
    settings. Hosts that need anything else should build their own
    UpdateChecker or install one with set_default_checker().
    """
    global _default_checker
    with _default_lock:
        if _default_checker is None:
            _default_checker = UpdateChecker()
        return _default_checker


def set_default_checker(checker: UpdateChecker | None) -> None:
    """Replace the shared checker (None resets it to a fresh default)."""
    global _default_checker
    with _default_lock:
        _default_checker = checker


def check_for_updates(completion: ResultHandler | None = None) -> threading.Thread:
    """Callback-form check using the default checker."""
    return default_checker().check_for_updates(completion)


async def check_for_updates_async(show_default_alert: bool = False) -> UpdateResult:
    """Awaitable-form check using the default checker."""
    return await default_checker().check_for_updates_async(show_default_alert)
