"""Turns raw feedback text into a classified feedback record."""
import datetime as dt
import itertools
import logging
import time
from typing import Any, Awaitable, Callable, Mapping, Union

from .schemas import AnalysisResult, CompanyProfile, FeedbackItem, FeedbackSource, Sentiment

logger = logging.getLogger(__name__)

ClassifierFn = Callable[[str, CompanyProfile], Awaitable[Union[AnalysisResult, Mapping[str, Any]]]]

FAILED_EMOTION = "Unknown"
FAILED_TOPICS = ["Error"]
FAILED_INSIGHT = "Analysis failed. Please try again."

_sequence = itertools.count(1)


def new_feedback_id() -> str:
    """Millisecond timestamp plus a process-wide sequence number."""
    return f"{time.time_ns() // 1_000_000}-{next(_sequence)}"


async def ingest(
    raw_text: str,
    profile: CompanyProfile,
    classify: ClassifierFn,
    source: FeedbackSource = FeedbackSource.DIRECT_INPUT,
    today: Callable[[], dt.date] = dt.date.today
) -> FeedbackItem:
    """Classify feedback text and build the record for the store.

    Callers reject blank text before calling this; the classifier is never
    asked about empty input.

    Classifier failures (transport errors, timeouts, payloads that do not
    match the schema) never reach the caller. They produce a Neutral record
    with intensity 0, the topic "Error" and a failure notice as insight.

    Args:
        raw_text: Non-blank feedback text
        profile: Company context passed through to the classifier
        classify: Async classifier returning an AnalysisResult or its JSON dict
        source: Where the text came from
        today: Clock for the record date

    Returns:
        FeedbackItem, either classified or the failure sentinel
    """
    try:
        result = await classify(raw_text, profile)
        if not isinstance(result, AnalysisResult):
            result = AnalysisResult.model_validate(result)
    except Exception as e:
        logger.warning(f"Classification failed: {e}. Storing sentinel record")
        return FeedbackItem(
            id=new_feedback_id(),
            source=source,
            text=raw_text,
            date=today(),
            sentiment=Sentiment.NEUTRAL,
            emotion=FAILED_EMOTION,
            intensity=0,
            topics=list(FAILED_TOPICS),
            actionable_insight=FAILED_INSIGHT,
            processing_method="sentinel"
        )

    logger.info(f"Classified feedback: {result.sentiment.value}/{', '.join(result.topics)}")

    return FeedbackItem(
        id=new_feedback_id(),
        source=source,
        text=raw_text,
        date=today(),
        sentiment=result.sentiment,
        emotion=result.emotion,
        intensity=result.intensity,
        topics=list(result.topics),
        actionable_insight=result.actionable_insight,
        processing_method="ai"
    )
