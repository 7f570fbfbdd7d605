"""Pydantic schemas for feedback records, AI responses and API payloads."""
import datetime as dt
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MIN_INTENSITY = 0
MAX_INTENSITY = 10


class Sentiment(str, Enum):
    """Closed set of sentiment labels."""

    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class FeedbackSource(str, Enum):
    """Where a feedback item came from."""

    TWITTER = "Twitter"
    REVIEW = "Review"
    EMAIL = "Email"
    SUPPORT = "Support"
    DIRECT_INPUT = "Direct Input"
    LIVE_FEED = "Live Feed"


def coerce_sentiment(value: Any) -> Sentiment:
    """Map a classifier label onto Sentiment, defaulting to Neutral.

    Matching is exact: "positive" or "Mixed" both come back as Neutral.
    """
    try:
        return Sentiment(value)
    except (ValueError, TypeError):
        return Sentiment.NEUTRAL


def coerce_source(value: Any) -> FeedbackSource:
    """Map a generator-supplied source onto FeedbackSource, defaulting to Live Feed."""
    try:
        return FeedbackSource(value)
    except (ValueError, TypeError):
        return FeedbackSource.LIVE_FEED


def clamp_intensity(value: int) -> int:
    return max(MIN_INTENSITY, min(MAX_INTENSITY, value))


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Domain records
# ============================================================================

class CompanyProfile(CamelModel):
    """Company context injected into every prompt once a name is set."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    industry: str = ""
    description: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.name.strip())


class FeedbackItem(CamelModel):
    """A classified piece of feedback. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    source: FeedbackSource
    text: str
    date: dt.date
    sentiment: Sentiment
    emotion: str
    intensity: int
    topics: List[str] = Field(default_factory=list)
    actionable_insight: Optional[str] = None
    processing_method: Literal["ai", "sentinel"] = "ai"

    @field_validator("sentiment", mode="before")
    @classmethod
    def _coerce_sentiment(cls, value: Any) -> Sentiment:
        return coerce_sentiment(value)

    @field_validator("intensity")
    @classmethod
    def _clamp_intensity(cls, value: int) -> int:
        return clamp_intensity(value)


class ExecutiveSummary(CamelModel):
    """Executive report over the whole feedback collection."""

    overview: str
    top_issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    generated_at: dt.datetime
    processing_method: Literal["ai", "sentinel"] = "ai"


# ============================================================================
# External service payloads
# ============================================================================

class AnalysisResult(CamelModel):
    """Classifier response for a single feedback text."""

    sentiment: Sentiment
    emotion: str
    intensity: int
    topics: List[str]
    actionable_insight: Optional[str] = None

    @field_validator("sentiment", mode="before")
    @classmethod
    def _coerce_sentiment(cls, value: Any) -> Sentiment:
        return coerce_sentiment(value)

    @field_validator("intensity")
    @classmethod
    def _clamp_intensity(cls, value: int) -> int:
        return clamp_intensity(value)


class SyntheticFeedback(CamelModel):
    """Generator response used by the live feed."""

    text: str = Field(..., min_length=1)
    source: str = FeedbackSource.LIVE_FEED.value

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("generated text is blank")
        return value


class SummaryContent(CamelModel):
    """Summarizer response, before the local timestamp is added."""

    overview: str
    top_issues: List[str]
    recommendations: List[str]


# ============================================================================
# API payloads
# ============================================================================

class FeedbackRequest(BaseModel):
    """Request schema for manual feedback submission."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "The new UI is sleek, but I can't find the logout button anymore."
            }
        }
    )

    text: str = Field(..., min_length=1, max_length=5000, description="Customer feedback text")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Feedback text cannot be empty")
        return value


class SentimentCounts(CamelModel):
    total: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class TopicCount(CamelModel):
    topic: str
    count: int


class SentimentSlice(CamelModel):
    sentiment: Sentiment
    count: int


class DashboardStats(CamelModel):
    """Everything the overview page renders, computed from the full store."""

    total: int
    positive: int
    negative: int
    neutral: int
    net_sentiment_score: int = Field(..., ge=-100, le=100)
    critical_issue_count: int
    positive_share: int = Field(..., description="Percentage of positive items, 0-100")
    sentiment_distribution: List[SentimentSlice]
    top_topics: List[TopicCount]


class LiveStatus(CamelModel):
    is_live: bool
    in_flight: int
    completed_ticks: int
    skipped_ticks: int
    interval_seconds: float
