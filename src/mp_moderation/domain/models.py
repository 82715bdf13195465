"""Domain models for mp_moderation — verdicts are transient, never stored on a Listing."""

from dataclasses import dataclass, field

from src.mp_common.enums import VerdictCategory


@dataclass(frozen=True)
class Verdict:
    category: VerdictCategory
    is_appropriate: bool
    confidence: float                # 0..1
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def safe(cls, confidence: float, *reasons: str) -> "Verdict":
        return cls(VerdictCategory.SAFE, True, confidence, reasons)

    @classmethod
    def inappropriate(cls, confidence: float, *reasons: str) -> "Verdict":
        return cls(VerdictCategory.INAPPROPRIATE, False, confidence, reasons)


@dataclass(frozen=True)
class ClassifierResponse:
    """Raw answer of the external text classifier."""

    verdict_text: str
