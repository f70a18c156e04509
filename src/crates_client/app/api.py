from __future__ import annotations

import logging
from typing import Optional

from dependency_injector import providers

from .container import Container
from ..config import urls
from ..config.settings import AppConfig
from ..core.ports.clock_port import ClockPort
from ..core.ports.transport_port import TransportPort
from ..core.query import Query
from ..infra import schemas
from ..infra.request_gate import RequestGate

logger = logging.getLogger(__name__)


class CratesClient:
    """Rate-limited client for the crates.io registry API.

    Every request made through one client shares a single rate limiter: at most one
    request starts per ``rate_limit_seconds``. Each endpoint method has two modes:

    - ``block=True`` (default): wait for the rate limiter, then perform the request.
      An optional ``timeout`` bounds the wait and raises RateLimitTimeout when it elapses.
    - ``block=False``: raise WouldBlock immediately when the rate limiter denies the
      request, leaving the retry policy to the caller.

    Errors:
        TransportError: the URL is malformed or the network round trip failed.
        DecodeError: the response is not the expected JSON shape (or not UTF-8 text).
        WouldBlock: a non-blocking call was denied by the rate limiter.

    Example:
        with CratesClient(user_agent="my_crawler (help@my_crawler.com)") as client:
            page = client.crates(Query(string="http", per_page=10))
            serde = client.crate("serde")
            readme = client.readme("serde", serde.crate_data.max_version)

        # Non-blocking usage with an external scheduler
        try:
            owners = client.owners("serde", block=False)
        except WouldBlock as e:
            schedule_retry(after=e.retry_after)
    """

    def __init__(
        self,
        user_agent: str | None = None,
        *,
        base_url: str | None = None,
        rate_limit_seconds: float | None = None,
        poll_interval_seconds: float | None = None,
        timeout_seconds: float | None = None,
        transport: TransportPort | None = None,
        clock: ClockPort | None = None,
    ):
        """Initialize the client.

        Args:
            user_agent: User-Agent header sent with every request. crates.io requires one that
                        identifies the crawler, e.g. "my_crawler (github.com/me/my_crawler)".
                        If None, uses CRATES_CLIENT_USER_AGENT environment variable.
            base_url: API root. If None, uses CRATES_CLIENT_BASE_URL or https://crates.io/api/v1/.
            rate_limit_seconds: Minimum interval between requests (default: 1.0).
            poll_interval_seconds: Sleep between admission attempts of blocking calls (default: 0.1).
            timeout_seconds: Network timeout of the HTTP transport (default: 20.0).
            transport: Optional transport replacing the httpx one (e.g. for tests).
            clock: Optional clock replacing the system monotonic clock (e.g. for tests).

        Raises:
            ValueError: If no user agent is configured.
        """
        self._container = Container()

        # Build config dict with only provided values
        config_dict = {}
        if user_agent is not None:
            config_dict["user_agent"] = user_agent
        if base_url is not None:
            config_dict["base_url"] = base_url
        if rate_limit_seconds is not None:
            config_dict["rate_limit_seconds"] = rate_limit_seconds
        if poll_interval_seconds is not None:
            config_dict["poll_interval_seconds"] = poll_interval_seconds
        if timeout_seconds is not None:
            config_dict["timeout_seconds"] = timeout_seconds

        # Resolve settings now so environment changes after import are honoured
        config = AppConfig(**config_dict)
        self._container.config.from_pydantic(config)

        if not self._container.config.user_agent():
            raise ValueError(
                "A user agent is required by the crates.io crawler policy: pass user_agent= "
                "or set CRATES_CLIENT_USER_AGENT"
            )

        if transport is not None:
            self._container.transport.override(providers.Object(transport))
        if clock is not None:
            self._container.clock.override(providers.Object(clock))

        self._container.init_resources()
        self._base_url: str = self._container.config.base_url()
        self._gate: RequestGate = self._container.gate()
        logger.info(f"crates client ready (base URL: {self._base_url})")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def gate(self) -> RequestGate:
        """The rate-limited request gate, for URLs not covered by an endpoint method."""
        return self._gate

    def crates(self, query: Query | None = None, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Crates:
        """Return one page of crates matching query (defaults to Query())."""
        url = urls.get_crates_url(self._base_url, query or Query())
        return self._gate.get_model(url, schemas.Crates, block=block, timeout=timeout)

    def search(self, text: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Crates:
        """Return one page of crates for a human-readable query such as "api cat=web sort=update"."""
        return self.crates(Query.parse(text), block=block, timeout=timeout)

    def crate(self, name: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.CrateResponse:
        url = urls.get_crate_url(self._base_url, name)
        return self._gate.get_model(url, schemas.CrateResponse, block=block, timeout=timeout)

    def version(self, name: str, version: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Version:
        url = urls.get_version_url(self._base_url, name, version)
        return self._gate.get_model(url, schemas.VersionResponse, block=block, timeout=timeout).version

    def dependencies(self, name: str, version: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Dependencies:
        url = urls.get_dependencies_url(self._base_url, name, version)
        return self._gate.get_model(url, schemas.Dependencies, block=block, timeout=timeout)

    def authors(self, name: str, version: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Authors:
        url = urls.get_authors_url(self._base_url, name, version)
        resp = self._gate.get_model(url, schemas.AuthorsResponse, block=block, timeout=timeout)
        return schemas.Authors.from_response(resp)

    def owners(self, name: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Owners:
        url = urls.get_owners_url(self._base_url, name)
        return self._gate.get_model(url, schemas.Owners, block=block, timeout=timeout)

    def downloads(self, name: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Downloads:
        url = urls.get_downloads_url(self._base_url, name)
        return self._gate.get_model(url, schemas.Downloads, block=block, timeout=timeout)

    def readme(self, name: str, version: str, *, block: bool = True, timeout: Optional[float] = None) -> str:
        """Return the rendered readme of a crate version as text."""
        url = urls.get_readme_url(self._base_url, name, version)
        return self._gate.get_text(url, block=block, timeout=timeout)

    def summary(self, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Summary:
        url = urls.get_summary_url(self._base_url)
        return self._gate.get_model(url, schemas.Summary, block=block, timeout=timeout)

    def categories(
        self,
        page: int | None = None,
        per_page: int | None = None,
        *,
        block: bool = True,
        timeout: Optional[float] = None,
    ) -> schemas.Categories:
        url = urls.get_categories_url(self._base_url, page, per_page)
        return self._gate.get_model(url, schemas.Categories, block=block, timeout=timeout)

    def category(self, slug: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Category:
        url = urls.get_category_url(self._base_url, slug)
        return self._gate.get_model(url, schemas.CategoryResponse, block=block, timeout=timeout).category

    def keywords(
        self,
        page: int | None = None,
        per_page: int | None = None,
        *,
        block: bool = True,
        timeout: Optional[float] = None,
    ) -> schemas.Keywords:
        url = urls.get_keywords_url(self._base_url, page, per_page)
        return self._gate.get_model(url, schemas.Keywords, block=block, timeout=timeout)

    def keyword(self, keyword: str, *, block: bool = True, timeout: Optional[float] = None) -> schemas.Keyword:
        url = urls.get_keyword_url(self._base_url, keyword)
        return self._gate.get_model(url, schemas.KeywordResponse, block=block, timeout=timeout).keyword

    def close(self) -> None:
        """Close the client and release the HTTP connections."""
        self._container.shutdown_resources()

    def __enter__(self) -> CratesClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "CratesClient",
    "AppConfig",
]
