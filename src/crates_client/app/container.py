from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..core.ports.clock_port import SystemClock
from ..infra.http_client import HttpTransport
from ..infra.rate_limiter import MinIntervalRateLimiter
from ..infra.request_gate import RequestGate

logger = logging.getLogger(__name__)


def transport_resource(user_agent, timeout_seconds):
	"""Create the httpx-backed transport as a resource so shutdown closes its connections."""
	logger.debug(f"Initializing HTTP transport (timeout: {timeout_seconds}s)")
	with HttpTransport(user_agent=user_agent, timeout_seconds=timeout_seconds) as transport:
		yield transport
	logger.debug("HTTP transport closed")


class Container(containers.DeclarativeContainer):
	"""Per-client object graph.

	Every CratesClient owns one Container instance, so the rate limiter singleton
	(and its last-request instant) is never shared between clients.
	"""

	config = providers.Configuration()

	clock = providers.Singleton(SystemClock)

	rate_limiter = providers.Singleton(
		MinIntervalRateLimiter,
		min_interval_seconds=config.rate_limit_seconds,
		clock=clock,
	)

	transport = providers.Resource(
		transport_resource,
		user_agent=config.user_agent,
		timeout_seconds=config.timeout_seconds,
	)

	gate = providers.Singleton(
		RequestGate,
		rate_limiter=rate_limiter,
		transport=transport,
		clock=clock,
		poll_interval_seconds=config.poll_interval_seconds,
	)
