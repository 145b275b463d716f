"""
Web availability probe - Checks that a web service answers with a 2xx status.

The probe owns a requests.Session and issues one GET per check. Retries,
alert debouncing and notification delivery belong to whoever schedules it.

Example:
    probe = AvailabilityProbe.with_user_agent(
        "https://example.com", "web-monitor/0.1 ops@example.com"
    )
    result = probe.check()
    if not result.is_healthy:
        print(result.diagnostic)
"""

import logging
import os
from typing import Union

import requests  # type: ignore
from requests import exceptions as req_exc  # type: ignore
from requests.utils import check_header_validity  # type: ignore
from urllib3 import exceptions as urllib3_exc  # type: ignore

from web_monitor._version import __version__
from web_monitor.core.entities import CheckResult, Healthy, Unhealthy
from web_monitor.core.exceptions import ConfigurationError
from web_monitor.core.ports import Checkable

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"web-monitor/{__version__}"
DEFAULT_TIMEOUT = 10.0

VerifyOption = Union[bool, str]


def _describe_transport_error(error: Exception) -> str:
    """Map a requests or urllib3 exception to a short cause label."""
    # Order matters: SSLError and ConnectTimeout are ConnectionError subclasses
    if isinstance(error, req_exc.Timeout):
        return "timed out"
    if isinstance(error, req_exc.SSLError):
        return "TLS error"
    if isinstance(error, req_exc.TooManyRedirects):
        return "too many redirects"
    if isinstance(
        error,
        (
            req_exc.InvalidURL,
            req_exc.MissingSchema,
            req_exc.InvalidSchema,
            req_exc.URLRequired,
            urllib3_exc.LocationValueError,
        ),
    ):
        return "invalid URL"
    if isinstance(error, req_exc.ConnectionError):
        return "connection error"
    return "request error"


def _validate_timeout(timeout: float) -> float:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigurationError(f"Timeout must be a number, got {timeout!r}")
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout!r}")
    return float(timeout)


def _build_session(user_agent: str, verify: VerifyOption) -> requests.Session:
    """
    Build a session carrying the User-Agent and TLS verification settings.

    Args:
        user_agent: Value for the User-Agent header
        verify: True/False, or a path to a CA bundle file or directory

    Returns:
        Configured requests.Session

    Raises:
        ConfigurationError: If the User-Agent is not a valid header value or
                            the CA bundle path does not exist
    """
    try:
        check_header_validity(("User-Agent", user_agent))
    except req_exc.InvalidHeader as e:
        raise ConfigurationError(f"Invalid user agent: {e}") from e

    if isinstance(verify, str):
        if not os.path.exists(verify):
            raise ConfigurationError(f"CA bundle not found: {verify}")
    elif not isinstance(verify, bool):
        raise ConfigurationError(
            f"verify must be a bool or a CA bundle path, got {verify!r}"
        )

    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    session.verify = verify
    return session


class AvailabilityProbe(Checkable):
    """
    Probe that reports a URL as healthy when a GET returns a 2xx status.

    Build it with one of:
    - AvailabilityProbe.new(url): default User-Agent
    - AvailabilityProbe.with_user_agent(url, user_agent): custom User-Agent,
      ideally carrying contact details for the target's operators
    - AvailabilityProbe.with_client(url, session): pre-configured session
    """

    def __init__(
        self,
        url: str,
        session: requests.Session,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the probe with an already configured session.

        Prefer the named constructors; this one performs no validation of
        the session, which its caller is responsible for.

        Args:
            url: Absolute URL to check
            session: HTTP client used for every check
            timeout: Per-request timeout in seconds
        """
        self._url = url
        self._session = session
        self._timeout = timeout

    @classmethod
    def new(
        cls,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        verify: VerifyOption = True,
    ) -> "AvailabilityProbe":
        """
        Build a probe identifying itself with the default User-Agent.

        Raises:
            ConfigurationError: If the HTTP client cannot be configured
        """
        return cls.with_user_agent(
            url, DEFAULT_USER_AGENT, timeout=timeout, verify=verify
        )

    @classmethod
    def with_user_agent(
        cls,
        url: str,
        user_agent: str,
        timeout: float = DEFAULT_TIMEOUT,
        verify: VerifyOption = True,
    ) -> "AvailabilityProbe":
        """
        Build a probe identifying itself with a caller-supplied User-Agent.

        Args:
            url: Absolute URL to check
            user_agent: User-Agent header value
            timeout: Per-request timeout in seconds
            verify: TLS verification flag or CA bundle path

        Returns:
            AvailabilityProbe owning a fresh session

        Raises:
            ConfigurationError: If the HTTP client cannot be configured
        """
        timeout = _validate_timeout(timeout)
        session = _build_session(user_agent, verify)
        logger.debug("Built probe for %s (user agent: %s)", url, user_agent)
        return cls(url, session, timeout=timeout)

    @classmethod
    def with_client(
        cls,
        url: str,
        session: requests.Session,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "AvailabilityProbe":
        """Build a probe around a session configured by the caller."""
        return cls(url, session, timeout=timeout)

    @property
    def url(self) -> str:
        return self._url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def session(self) -> requests.Session:
        return self._session

    def check(self) -> CheckResult:
        """
        GET the URL once and classify the outcome.

        Returns:
            Healthy for a 2xx response, Unhealthy otherwise. Transport
            failures are reported as Unhealthy and never raised.
        """
        # urllib3 lets LocationParseError through unwrapped for bad host labels
        try:
            with self._session.get(
                self._url, timeout=self._timeout, stream=True
            ) as response:
                status_code = response.status_code
                reason = response.reason or ""
        except (req_exc.RequestException, urllib3_exc.HTTPError) as e:
            logger.debug("Request to %s failed: %s", self._url, e)
            cause = _describe_transport_error(e)
            return self._unhealthy(f"Failed to connect to {self._url} ({cause})")

        if 200 <= status_code < 300:
            logger.info("%s is up", self._url)
            return Healthy()

        status = f"{status_code} {reason}".rstrip()
        return self._unhealthy(f"Failed to get {self._url} - {status}")

    def _unhealthy(self, diagnostic: str) -> Unhealthy:
        logger.info("%s is down", self._url)
        logger.error("%s", diagnostic)
        return Unhealthy(diagnostic)

    def close(self) -> None:
        """Release pooled connections held by the session."""
        self._session.close()

    def __enter__(self) -> "AvailabilityProbe":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"AvailabilityProbe(url={self._url!r}, timeout={self._timeout})"
