"""End-of-life status resolution against endoflife.date."""

from __future__ import annotations

import threading

import httpx
from pydantic import ValidationError as PydanticValidationError

from corrator.core.cache import EolCache
from corrator.models.application import EolConfig
from corrator.models.lifecycle import LifecycleRecord
from corrator.utils.errors import (
    NORMALIZATION_HINT,
    LookupFailedError,
    LookupNetworkError,
    LookupParseError,
    VersionNormalizationError,
)
from corrator.utils.logging import get_logger

logger = get_logger("eol")

DEFAULT_BASE_URL = "https://endoflife.date"


def normalize_version(eol_config: EolConfig, version: str) -> str:
    """Apply the EOL pattern to an extracted version.

    The ``version`` group is used when the pattern defines one, otherwise
    the whole match.

    Raises:
        VersionNormalizationError: If the pattern does not match
    """
    pattern = eol_config.version_pattern
    match = pattern.search(version)
    if match is None:
        raise VersionNormalizationError(eol_config.product_name, version, pattern.pattern)

    if "version" in pattern.groupindex:
        token = match.group("version")
        if token is None:
            raise VersionNormalizationError(eol_config.product_name, version, pattern.pattern)
        return token
    return match.group(0)


class EolResolver:
    """Cache-first resolver of lifecycle records.

    Records with a concrete end-of-life date are immutable and cached
    forever. Records whose ``eol`` is the alive sentinel are returned but
    never cached, so they are looked up again on the next run.

    Example:
        resolver = EolResolver(EolCache())
        record = resolver.resolve(app.eol, "22.04.3")
        print(record.status)
    """

    def __init__(
        self,
        cache: EolCache | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            cache: Record cache, or None to always query the service
            base_url: Base URL of the lifecycle service
            timeout: Request timeout in seconds
            max_retries: Connection retries for the HTTP transport
            client: Pre-configured HTTP client (mainly for tests)
        """
        self._cache = cache
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._client = client
        self._count_lock = threading.Lock()
        self._request_count = 0

    @property
    def request_count(self) -> int:
        """Number of requests sent to the lifecycle service."""
        return self._request_count

    def _get_client(self) -> httpx.Client:
        """Create an HTTP client with retry support."""
        transport = httpx.HTTPTransport(retries=self._max_retries)
        return httpx.Client(
            timeout=self._timeout,
            transport=transport,
            follow_redirects=True,
        )

    def url_for(self, product: str, version: str) -> str:
        """Build the request target for a product release cycle."""
        return f"{self._base_url}/api/{product}/{version}.json"

    def resolve(self, eol_config: EolConfig, version: str) -> LifecycleRecord:
        """Resolve the lifecycle record for an extracted version.

        Args:
            eol_config: Product name and normalisation pattern
            version: Version extracted from the application's output

        Returns:
            The lifecycle record

        Raises:
            EolError: If the version cannot be normalised or the lookup fails
        """
        product = eol_config.product_name
        cycle = normalize_version(eol_config, version)

        if self._cache is not None:
            cached = self._cache.get(product, cycle)
            if cached is not None:
                return cached

        record = self.fetch(product, cycle)

        if record.alive or self._cache is None:
            return record

        try:
            return self._cache.insert_if_absent(product, cycle, record)
        except OSError as e:
            logger.warning(f"Unable to cache {product} {cycle} in {self._cache.cache_dir}: {e}")
            return record

    def fetch(self, product: str, cycle: str) -> LifecycleRecord:
        """Query the lifecycle service, bypassing the cache.

        Raises:
            LookupFailedError: On a non-success response
            LookupNetworkError: If the request could not be sent
            LookupParseError: If the body is not a valid cycle
        """
        url = self.url_for(product, cycle)
        with self._count_lock:
            self._request_count += 1

        logger.debug(f"Requesting {url}")
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with self._get_client() as client:
                    response = client.get(url)
        except httpx.HTTPError as e:
            raise LookupNetworkError(url, str(e)) from e

        if not response.is_success:
            logger.warning(f"Lifecycle lookup for {product} {cycle} returned HTTP {response.status_code}")
            logger.warning(f"-- hint: request was {url}")
            logger.warning(f"-- hint: {NORMALIZATION_HINT}")
            raise LookupFailedError(url, response.status_code)

        try:
            return LifecycleRecord.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise LookupParseError(url, str(e)) from e
