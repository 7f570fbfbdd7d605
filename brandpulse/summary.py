"""On-demand executive summary over the whole feedback collection."""
import datetime as dt
import logging
from typing import Any, Awaitable, Callable, Mapping, Sequence, Union

from .schemas import CompanyProfile, ExecutiveSummary, FeedbackItem, SummaryContent

logger = logging.getLogger(__name__)

SummarizerFn = Callable[[str, CompanyProfile], Awaitable[Union[SummaryContent, Mapping[str, Any]]]]

FAILED_OVERVIEW = "Could not generate summary at this time."


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def format_feedback_line(item: FeedbackItem) -> str:
    return f"- [{item.sentiment.value}] ({', '.join(item.topics)}): {item.text}"


def format_feedback_lines(items: Sequence[FeedbackItem]) -> str:
    """Render the collection as one compact line per item, in store order."""
    return "\n".join(format_feedback_line(item) for item in items)


async def summarize(
    items: Sequence[FeedbackItem],
    profile: CompanyProfile,
    summarize_fn: SummarizerFn,
    now: Callable[[], dt.datetime] = _utcnow
) -> ExecutiveSummary:
    """Ask the summarizer for an executive report on the given items.

    Never raises. Any summarizer failure yields a sentinel summary with
    empty lists and an apologetic overview. Callers normally only ask when
    there is at least one item.

    Args:
        items: Feedback to summarize
        profile: Company context passed through to the summarizer
        summarize_fn: Async summarizer taking (feedback_lines, profile)
        now: Clock for generated_at

    Returns:
        ExecutiveSummary stamped with the local generation time
    """
    feedback_lines = format_feedback_lines(items)

    try:
        content = await summarize_fn(feedback_lines, profile)
        if not isinstance(content, SummaryContent):
            content = SummaryContent.model_validate(content)
    except Exception as e:
        logger.warning(f"Summary generation failed: {e}")
        return ExecutiveSummary(
            overview=FAILED_OVERVIEW,
            top_issues=[],
            recommendations=[],
            generated_at=now(),
            processing_method="sentinel"
        )

    logger.info(f"Executive summary generated from {len(items)} items")

    return ExecutiveSummary(
        overview=content.overview,
        top_issues=list(content.top_issues),
        recommendations=list(content.recommendations),
        generated_at=now(),
        processing_method="ai"
    )
