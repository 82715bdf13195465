"""Tests for ModerationPolicy — deterministic tiers and classifier escalation."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.mp_common.enums import ListingCategory, VerdictCategory
from src.mp_common.errors import ModerationUnavailableError
from src.mp_moderation.domain.keywords import FALLBACK_IMAGES
from src.mp_moderation.domain.models import ClassifierResponse
from src.mp_moderation.domain.policy import ModerationPolicy, interpret_classifier_text
from src.mp_moderation.domain.rate_limit import CallRateLimiter
from tests.factories import FakeClock, make_listing

UNTRUSTED = "https://cdn.example.org/photos/123.jpg"


def _classifier(answer: str = "APPROPRIATE - off-road gear") -> MagicMock:
    classifier = MagicMock()
    classifier.classify = AsyncMock(return_value=ClassifierResponse(verdict_text=answer))
    return classifier


class TestClassifyText:
    def test_blocked_keyword(self):
        verdict = ModerationPolicy().classify_text("nude photo")
        assert verdict.is_appropriate is False
        assert verdict.category is VerdictCategory.INAPPROPRIATE
        assert verdict.confidence == 0.9
        assert "nude" in verdict.reasons[0]

    def test_many_safe_keywords(self):
        verdict = ModerationPolicy().classify_text("jeep tire winch")
        assert verdict.is_appropriate is True
        assert verdict.confidence == 0.8

    def test_neutral_text(self):
        verdict = ModerationPolicy().classify_text("Lawn chair")
        assert verdict.is_appropriate is True
        assert verdict.confidence == 0.6

    def test_case_insensitive(self):
        assert ModerationPolicy().classify_text("NSFW").is_appropriate is False

    def test_keyword_filtering_disabled(self):
        policy = ModerationPolicy(enable_keyword_filtering=False)
        assert policy.classify_text("nude photo").is_appropriate is True


class TestClassifyImage:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("ref", ["file:///data/1.jpg", "content://media/2", "ph://abc"])
    async def test_local_uri_is_safe(self, ref):
        verdict = await ModerationPolicy().classify_image(ref)
        assert verdict.is_appropriate is True
        assert verdict.confidence == 0.8

    @pytest.mark.asyncio
    async def test_trusted_domain(self):
        verdict = await ModerationPolicy().classify_image(
            "https://images.unsplash.com/photo-1?w=400"
        )
        assert verdict.is_appropriate is True
        assert verdict.confidence == 0.9

    @pytest.mark.asyncio
    async def test_trusted_name_in_path_does_not_count(self):
        policy = ModerationPolicy()
        assert policy.is_trusted_domain("https://evil.example/images.unsplash.com/x") is False

    @pytest.mark.asyncio
    async def test_blocked_keyword_in_url(self):
        verdict = await ModerationPolicy().classify_image("https://cdn.example.org/gore.jpg")
        assert verdict.is_appropriate is False
        assert verdict.confidence == 0.8

    @pytest.mark.asyncio
    async def test_context_text_flagged(self):
        verdict = await ModerationPolicy().classify_image(UNTRUSTED, "gun rack")
        assert verdict.is_appropriate is False
        assert verdict.reasons == ("Image description contains inappropriate content",)

    @pytest.mark.asyncio
    async def test_untrusted_without_classifier_needs_review(self):
        verdict = await ModerationPolicy().classify_image(UNTRUSTED, "Winch")
        assert verdict.is_appropriate is False
        assert verdict.confidence == 0.5

    @pytest.mark.asyncio
    async def test_escalates_to_classifier(self):
        classifier = _classifier("APPROPRIATE - recovery gear")
        verdict = await ModerationPolicy(classifier).classify_image(UNTRUSTED, "Winch")

        classifier.classify.assert_awaited_once()
        assert "Winch" in classifier.classify.await_args.args[0]
        assert verdict.is_appropriate is True
        assert verdict.confidence == 0.7

    @pytest.mark.asyncio
    async def test_classifier_says_inappropriate(self):
        verdict = await ModerationPolicy(_classifier("INAPPROPRIATE - spam")).classify_image(
            UNTRUSTED, "Winch"
        )
        assert verdict.is_appropriate is False

    @pytest.mark.asyncio
    async def test_no_context_skips_classifier(self):
        classifier = _classifier()
        verdict = await ModerationPolicy(classifier).classify_image(UNTRUSTED)
        classifier.classify.assert_not_awaited()
        assert verdict.confidence == 0.5

    @pytest.mark.asyncio
    async def test_classifier_unavailable_needs_review(self):
        classifier = MagicMock()
        classifier.classify = AsyncMock(side_effect=ModerationUnavailableError("503"))
        verdict = await ModerationPolicy(classifier).classify_image(UNTRUSTED, "Winch")
        assert verdict.is_appropriate is False
        assert verdict.confidence == 0.5

    @pytest.mark.asyncio
    async def test_classifier_timeout_needs_review(self):
        async def _slow(prompt):
            await asyncio.sleep(1)

        classifier = MagicMock()
        classifier.classify = _slow
        policy = ModerationPolicy(classifier, classifier_timeout=0.01)

        verdict = await policy.classify_image(UNTRUSTED, "Winch")

        assert verdict.is_appropriate is False
        assert verdict.confidence == 0.5

    @pytest.mark.asyncio
    async def test_ai_disabled_skips_classifier(self):
        classifier = _classifier()
        await ModerationPolicy(classifier, enable_ai=False).classify_image(UNTRUSTED, "Winch")
        classifier.classify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rate_limited_skips_classifier(self):
        classifier = _classifier()
        limiter = CallRateLimiter(per_minute=1, clock=FakeClock())
        policy = ModerationPolicy(classifier, rate_limiter=limiter)

        first = await policy.classify_image(UNTRUSTED, "Winch")
        second = await policy.classify_image(UNTRUSTED, "Winch")

        assert classifier.classify.await_count == 1
        assert first.is_appropriate is True
        assert second.confidence == 0.5

    @pytest.mark.asyncio
    async def test_unexpected_failure_defaults_to_safe(self):
        classifier = MagicMock()
        classifier.classify = AsyncMock(side_effect=RuntimeError("boom"))
        verdict = await ModerationPolicy(classifier).classify_image(UNTRUSTED, "Winch")
        assert verdict.is_appropriate is True
        assert verdict.confidence == 0.3


class TestClassifyListing:
    @pytest.mark.asyncio
    async def test_clean_listing(self):
        verdict = await ModerationPolicy().classify_listing(make_listing())
        assert verdict.is_appropriate is True
        assert verdict.confidence == 0.8

    @pytest.mark.asyncio
    async def test_text_checked_before_images(self):
        classifier = _classifier()
        listing = make_listing(description="explicit content", images=[UNTRUSTED])
        verdict = await ModerationPolicy(classifier).classify_listing(listing)
        assert verdict.confidence == 0.9
        classifier.classify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_failing_image_decides(self):
        listing = make_listing(images=["file:///ok.jpg", "https://x.example/weapon.png"])
        verdict = await ModerationPolicy().classify_listing(listing)
        assert verdict.is_appropriate is False
        assert verdict.reasons == ("URL contains inappropriate keywords",)


class TestInterpretClassifierText:
    @pytest.mark.parametrize(
        ("text", "appropriate"),
        [
            ("APPROPRIATE - camping gear", True),
            ("appropriate", True),
            ("INAPPROPRIATE - nudity", False),
            ("Inappropriate", False),
            ("I cannot tell", False),
        ],
    )
    def test_verdicts(self, text, appropriate):
        verdict = interpret_classifier_text(text)
        assert verdict.is_appropriate is appropriate
        assert verdict.confidence == 0.7


class TestFallbackImages:
    def test_by_category(self):
        policy = ModerationPolicy()
        assert policy.fallback_image_for(ListingCategory.CAMPING) == FALLBACK_IMAGES["camping"]
        assert policy.fallback_image_for("tools") == FALLBACK_IMAGES["default"]
