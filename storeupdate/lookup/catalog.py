"""
Catalog lookup for storeupdate.

This module asks an app-distribution catalog which version it currently
publishes for an application. It issues a single GET to a lookup endpoint
keyed by the application's bundle/package identifier and reads the version
out of the JSON response WITHOUT retrying.

Endpoint Contract:
    GET https://<catalog-host>/lookup?bundleId=<identifier>

    {
      "resultCount": 1,
      "results": [
        {"version": "2.4.1", "trackViewUrl": "...", ...}
      ]
    }

Only ``results[0].version`` is consumed. The path is a JSONPath expression
(jsonpath-ng) so other catalogs with a different payload shape can be
queried by passing ``version_path``.

Outcome Rules:
    - Transport failure (connection error, timeout, HTTP error status, a
      session closed by the host): FetchOutcome(version=None, error=NetworkError)
    - Body that is not JSON, not an object, an empty "results" list, a
      missing or non-string "version": FetchOutcome(version=None, error=None)
    - Otherwise: FetchOutcome(version="<string>", error=None)

A "not found" outcome is distinct from a transport failure:
both end up as "no update", but only the transport failure carries an error.

Example:
    From Python:

        from storeupdate.lookup import RemoteVersionFetcher, build_lookup_url

        url = build_lookup_url("com.example.app")
        outcome = RemoteVersionFetcher(timeout=10).fetch(url)
        if outcome.error:
            print(f"Lookup failed: {outcome.error}")
        elif outcome.version:
            print(f"Catalog version: {outcome.version}")

Notes:
- Each fetch uses its own requests.Session unless one is injected, so
  concurrent checks share no connection state
- Adapters are mounted with zero retries; the caller decides what to do
- Timeout is None by default, which keeps requests' own behavior
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlparse

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.jsonpath import JSONPath
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from storeupdate.config.loader import DEFAULT_LOOKUP_ENDPOINT, DEFAULT_USER_AGENT
from storeupdate.exceptions import ConfigError, NetworkError
from storeupdate.logging import Logger, get_global_logger

DEFAULT_VERSION_PATH = "results[0].version"

_IDENTIFIER_FIELD = "{identifier}"


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one catalog lookup.

    Attributes:
        version: Published version string, or None when not found.
        error: NetworkError when the transport failed, else None.

    """

    version: str | None = None
    error: Exception | None = None


def build_lookup_url(
    identifier: str | None, endpoint: str = DEFAULT_LOOKUP_ENDPOINT
) -> str | None:
    """Build the catalog lookup URL for an application identifier.

    Args:
        identifier: Bundle/package identifier (e.g., "com.example.app").
            Quoted before substitution.
        endpoint: URL template containing an {identifier} field.

    Returns:
        The lookup URL, or None if it cannot be constructed (blank
        identifier, template without {identifier}, or a result that is not
        an absolute http(s) URL).

    Example:
        >>> build_lookup_url("com.example.app")
        'https://itunes.apple.com/lookup?bundleId=com.example.app'
        >>> build_lookup_url("") is None
        True
    """
    if not isinstance(identifier, str) or not identifier.strip():
        return None
    if _IDENTIFIER_FIELD not in endpoint:
        return None

    url = endpoint.replace(_IDENTIFIER_FIELD, quote(identifier.strip(), safe=""))
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return url


def make_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    """
    Create a requests.Session for catalog lookups.

    - Mounts adapters with zero retries (a failed lookup is reported, not retried).
    - Sets a User-Agent identifying the library.
    - Asks for JSON.
    """
    s = requests.Session()
    no_retries = Retry(total=0, read=False, raise_on_status=False)
    s.headers.update(
        {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
    )
    s.mount("http://", HTTPAdapter(max_retries=no_retries))
    s.mount("https://", HTTPAdapter(max_retries=no_retries))
    return s


def compile_version_path(version_path: str) -> JSONPath:
    """
    Compile a JSONPath expression for the published version.

    Raises:
      ConfigError - when the expression is empty or not valid JSONPath
    """
    if not isinstance(version_path, str) or not version_path.strip():
        raise ConfigError("version_path must be a non-empty JSONPath string")
    try:
        return jsonpath_parse(version_path)
    except Exception as err:
        raise ConfigError(f"Invalid version_path JSONPath: {err}") from err


_DEFAULT_VERSION_EXPR = compile_version_path(DEFAULT_VERSION_PATH)


def extract_version(
    payload: Any, version_path: str | JSONPath = _DEFAULT_VERSION_EXPR
) -> str | None:
    """Read the published version out of a decoded lookup payload.

    Returns None for anything that is not an object whose first result
    carries a string version. A string 'version_path' is compiled first
    and raises ConfigError when invalid.
    """
    if isinstance(version_path, str):
        version_path = compile_version_path(version_path)
    if not isinstance(payload, dict):
        return None

    try:
        matches = version_path.find(payload)
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
    if not matches:
        return None

    value = matches[0].value
    return value if isinstance(value, str) else None


class RemoteVersionFetcher:
    """Fetches the published version of an application from the catalog.

    Configuration example:
        fetcher = RemoteVersionFetcher(
            timeout=10,
            user_agent="myapp/2.1",
        )
        outcome = fetcher.fetch("https://itunes.apple.com/lookup?bundleId=com.example.app")

    Raises:
        ConfigError: If version_path is not a valid JSONPath expression.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        version_path: str = DEFAULT_VERSION_PATH,
        logger: Logger | None = None,
    ) -> None:
        self.session = session
        self.timeout = timeout
        self.user_agent = user_agent
        self.version_path = version_path
        self._version_expr = compile_version_path(version_path)
        self._logger = logger

    @property
    def logger(self) -> Logger:
        return self._logger or get_global_logger()

    def _get(self, session: requests.Session, lookup_url: str) -> requests.Response:
        """Issue the GET, translating transport failures to NetworkError."""
        try:
            response = session.get(lookup_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise NetworkError(
                f"Catalog lookup failed: {response.status_code} {response.reason}"
            ) from err
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"Failed to call catalog: {err}") from err
        return response

    def fetch(self, lookup_url: str) -> FetchOutcome:
        """Look up the published version (single request, no retry).

        Args:
            lookup_url: Fully built lookup URL (see build_lookup_url).

        Returns:
            FetchOutcome with the version, an error, or neither when the
            catalog had nothing usable.
        """
        logger = self.logger
        logger.verbose("LOOKUP", f"Calling catalog: GET {lookup_url}")

        if self.session is None:
            session_cm = make_session(self.user_agent)
        else:
            session_cm = nullcontext(self.session)
        with session_cm as session:
            try:
                response = self._get(session, lookup_url)
            except NetworkError as err:
                logger.warning("LOOKUP", str(err))
                return FetchOutcome(error=err)

        logger.verbose("LOOKUP", f"Catalog response: {response.status_code}")

        # requests raises its own JSONDecodeError, a ValueError subclass
        try:
            payload = response.json()
        except ValueError:
            logger.verbose(
                "LOOKUP", f"Response is not JSON: {response.text[:200]!r}"
            )
            return FetchOutcome()

        if isinstance(payload, dict):
            logger.debug("LOOKUP", f"Payload keys: {', '.join(map(str, payload))}")

        version = extract_version(payload, self._version_expr)
        if version is None:
            logger.verbose("LOOKUP", f"No version at {self.version_path!r}")
            return FetchOutcome()

        logger.verbose("LOOKUP", f"Catalog version: {version}")
        return FetchOutcome(version=version)
