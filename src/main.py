"""Composition root — wires settings into stores, moderation and the facade.

Usage:
    async with marketplace_session() as facade:
        facade.query()
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from config.settings import Settings, settings as default_settings
from src.mp_common.enums import SnapshotBackend
from src.mp_common.redis_client import close_redis, get_redis
from src.mp_listing.domain.repository import SnapshotStoreProtocol
from src.mp_listing.infrastructure.persistence import InMemoryListingRepository
from src.mp_listing.infrastructure.snapshot_store import (
    InMemorySnapshotStore,
    JsonFileSnapshotStore,
    RedisSnapshotStore,
)
from src.mp_marketplace.application.facade import MarketplaceFacade
from src.mp_marketplace.domain.identity import (
    IdentityProviderProtocol,
    SessionIdentityProvider,
)
from src.mp_moderation.application.service import ModerationService
from src.mp_moderation.domain.policy import ModerationPolicy
from src.mp_moderation.domain.rate_limit import CallRateLimiter
from src.mp_moderation.infrastructure.http_classifier import HttpTextClassifier
from src.mp_premium.domain.lifecycle import PremiumLifecycle

logger = logging.getLogger("mp.main")


def configure_logging(cfg: Settings) -> None:
    level = logging.DEBUG if cfg.DEBUG else getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def build_snapshot_store(cfg: Settings) -> SnapshotStoreProtocol:
    backend = SnapshotBackend(cfg.SNAPSHOT_BACKEND.lower())
    if backend is SnapshotBackend.MEMORY:
        return InMemorySnapshotStore()
    if backend is SnapshotBackend.REDIS:
        return RedisSnapshotStore(await get_redis(cfg.REDIS_URL), key=cfg.SNAPSHOT_KEY)
    return JsonFileSnapshotStore(cfg.SNAPSHOT_PATH)


def build_classifier(cfg: Settings) -> HttpTextClassifier | None:
    if not cfg.MODERATION_ENABLE_AI or not cfg.CLASSIFIER_BASE_URL:
        return None
    return HttpTextClassifier(
        base_url=cfg.CLASSIFIER_BASE_URL,
        api_key=cfg.CLASSIFIER_API_KEY,
        model=cfg.CLASSIFIER_MODEL,
        timeout=cfg.MODERATION_CLASSIFIER_TIMEOUT_SECONDS,
    )


def build_moderation(cfg: Settings) -> ModerationService:
    policy = ModerationPolicy(
        build_classifier(cfg),
        trusted_domains=cfg.MODERATION_TRUSTED_DOMAINS,
        classifier_timeout=cfg.MODERATION_CLASSIFIER_TIMEOUT_SECONDS,
        rate_limiter=CallRateLimiter(
            per_minute=cfg.MODERATION_MAX_CALLS_PER_MINUTE,
            per_hour=cfg.MODERATION_MAX_CALLS_PER_HOUR,
        ),
        enable_ai=cfg.MODERATION_ENABLE_AI,
        enable_keyword_filtering=cfg.MODERATION_ENABLE_KEYWORD_FILTERING,
        enable_domain_filtering=cfg.MODERATION_ENABLE_DOMAIN_FILTERING,
    )
    return ModerationService(policy, concurrency=cfg.MODERATION_BATCH_CONCURRENCY)


async def build_marketplace(
    cfg: Settings | None = None,
    identity: IdentityProviderProtocol | None = None,
) -> MarketplaceFacade:
    cfg = cfg or default_settings
    configure_logging(cfg)
    premium = PremiumLifecycle(default_duration_days=cfg.PREMIUM_BOOST_DAYS)
    facade = MarketplaceFacade(
        InMemoryListingRepository(premium=premium),
        await build_snapshot_store(cfg),
        identity or SessionIdentityProvider(),
        moderation=build_moderation(cfg),
        premium=premium,
    )
    logger.info("%s ready (snapshot backend=%s)", cfg.APP_NAME, cfg.SNAPSHOT_BACKEND)
    return facade


async def shutdown_marketplace(facade: MarketplaceFacade) -> None:
    """Close the classifier HTTP client and the shared Redis pool."""
    await facade.aclose()
    await close_redis()
    logger.info("Marketplace shut down")


@asynccontextmanager
async def marketplace_session(
    cfg: Settings | None = None,
    identity: IdentityProviderProtocol | None = None,
) -> AsyncGenerator[MarketplaceFacade, None]:
    """Startup: build and load the catalog. Shutdown: release clients."""
    facade = await build_marketplace(cfg, identity)
    try:
        await facade.load()
        yield facade
    finally:
        await shutdown_marketplace(facade)
