"""ModerationPolicy — classifies listing text and images before display.

Deterministic tier (synchronous, always runs):
  blocked keyword present     → inappropriate, 0.9
  more than two safe keywords → safe, 0.8
  otherwise                   → safe, 0.6

Image tier (may suspend on the external classifier):
  local device URI            → safe, 0.8
  trusted domain              → safe, 0.9
  blocked keyword in URL      → inappropriate, 0.8
  otherwise: text tier on the context, then the external classifier;
  classifier unavailable      → inappropriate, 0.5 (manual review)
  unexpected policy failure   → safe, 0.3
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import replace
from urllib.parse import urlparse

from src.mp_common.errors import ModerationUnavailableError
from src.mp_listing.domain.models import Listing
from src.mp_moderation.domain.classifier import TextClassifierProtocol
from src.mp_moderation.domain.keywords import (
    BLOCKED_KEYWORDS,
    CLASSIFIER_PROMPT,
    FALLBACK_IMAGES,
    LOCAL_URI_PREFIXES,
    SAFE_KEYWORDS,
    TRUSTED_IMAGE_DOMAINS,
)
from src.mp_moderation.domain.models import Verdict
from src.mp_moderation.domain.rate_limit import CallRateLimiter

logger = logging.getLogger(__name__)

SAFE_KEYWORD_THRESHOLD = 2
EXTERNAL_CONFIDENCE = 0.7


class ModerationPolicy:
    def __init__(
        self,
        classifier: TextClassifierProtocol | None = None,
        *,
        blocked_keywords: Iterable[str] = BLOCKED_KEYWORDS,
        safe_keywords: Iterable[str] = SAFE_KEYWORDS,
        trusted_domains: Iterable[str] = TRUSTED_IMAGE_DOMAINS,
        classifier_timeout: float = 10.0,
        rate_limiter: CallRateLimiter | None = None,
        enable_ai: bool = True,
        enable_keyword_filtering: bool = True,
        enable_domain_filtering: bool = True,
    ) -> None:
        self._classifier = classifier
        self._blocked = tuple(k.lower() for k in blocked_keywords)
        self._safe = tuple(k.lower() for k in safe_keywords)
        self._trusted = tuple(d.lower() for d in trusted_domains)
        self._timeout = classifier_timeout
        self._rate_limiter = rate_limiter
        self._enable_ai = enable_ai
        self._enable_keywords = enable_keyword_filtering
        self._enable_domains = enable_domain_filtering

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def classify_text(self, text: str) -> Verdict:
        lower = (text or "").lower()
        if self._enable_keywords:
            blocked = [kw for kw in self._blocked if kw in lower]
            if blocked:
                return Verdict.inappropriate(
                    0.9, f"Contains inappropriate keywords: {', '.join(blocked)}"
                )

        safe_hits = sum(1 for kw in self._safe if kw in lower)
        if safe_hits > SAFE_KEYWORD_THRESHOLD:
            return Verdict.safe(0.8, "Contains safe marketplace keywords")
        return Verdict.safe(0.6, "No inappropriate content detected")

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def is_local_uri(self, image_ref: str) -> bool:
        return image_ref.lower().startswith(LOCAL_URI_PREFIXES)

    def is_trusted_domain(self, image_ref: str) -> bool:
        try:
            host = (urlparse(image_ref).hostname or "").lower()
        except ValueError:
            return False
        return bool(host) and any(domain in host for domain in self._trusted)

    async def classify_image(self, image_ref: str, context_text: str | None = None) -> Verdict:
        try:
            return await self._classify_image(image_ref, context_text)
        except Exception:
            logger.exception("Content moderation error for image %s", image_ref)
            return Verdict.safe(0.3, "Moderation service unavailable, defaulting to safe")

    async def _classify_image(self, image_ref: str, context_text: str | None) -> Verdict:
        if self.is_local_uri(image_ref):
            return Verdict.safe(0.8, "Local device image assumed safe")

        if self._enable_domains and self.is_trusted_domain(image_ref):
            return Verdict.safe(0.9, "Image from trusted domain")

        if self._enable_keywords and any(kw in image_ref.lower() for kw in self._blocked):
            return Verdict.inappropriate(0.8, "URL contains inappropriate keywords")

        if context_text:
            text_verdict = self.classify_text(context_text)
            if not text_verdict.is_appropriate:
                return replace(
                    text_verdict,
                    reasons=("Image description contains inappropriate content",),
                )
            external = await self._escalate(context_text)
            if external is not None:
                return external

        return Verdict.inappropriate(0.5, "Image from untrusted domain requires manual review")

    async def _escalate(self, description: str) -> Verdict | None:
        """Ask the external classifier; None means it was unavailable."""
        if not self._enable_ai or self._classifier is None:
            return None
        if self._rate_limiter is not None and not self._rate_limiter.try_acquire():
            logger.warning("Classifier call budget exhausted, deferring to manual review")
            return None

        prompt = CLASSIFIER_PROMPT.format(description=description)
        try:
            response = await asyncio.wait_for(
                self._classifier.classify(prompt), timeout=self._timeout
            )
        except TimeoutError:
            logger.warning("Classifier timed out after %.1fs", self._timeout)
            return None
        except ModerationUnavailableError as exc:
            logger.warning("Classifier unavailable: %s", exc.message)
            return None
        return interpret_classifier_text(response.verdict_text)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    async def classify_listing(self, listing: Listing) -> Verdict:
        text = f"{listing.title} {listing.description} {' '.join(listing.tags)}"
        text_verdict = self.classify_text(text)
        if not text_verdict.is_appropriate:
            return text_verdict

        for image_ref in listing.images:
            image_verdict = await self.classify_image(image_ref, listing.title)
            if not image_verdict.is_appropriate:
                return image_verdict

        return Verdict.safe(0.8, "All content passed moderation checks")

    async def aclose(self) -> None:
        if self._classifier is not None:
            await self._classifier.aclose()

    # ------------------------------------------------------------------
    # Display fallbacks
    # ------------------------------------------------------------------

    def fallback_image_for(self, category: str) -> str:
        key = str(getattr(category, "value", category)).lower()
        return FALLBACK_IMAGES.get(key, FALLBACK_IMAGES["default"])


def interpret_classifier_text(verdict_text: str) -> Verdict:
    upper = verdict_text.upper()
    # "INAPPROPRIATE" contains "APPROPRIATE"; rule out the negative first.
    if "INAPPROPRIATE" not in upper and "APPROPRIATE" in upper:
        return Verdict.safe(EXTERNAL_CONFIDENCE, verdict_text)
    return Verdict.inappropriate(EXTERNAL_CONFIDENCE, verdict_text)
