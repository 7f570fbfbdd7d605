"""Dashboard statistics derived from the feedback collection.

Every function here is pure and recomputes from the full collection on each
call. There is no cached or incremental state.
"""
import math
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

from .schemas import (
    DashboardStats,
    FeedbackItem,
    Sentiment,
    SentimentCounts,
    SentimentSlice,
    TopicCount,
)

# Negative items above this intensity count as critical issues
CRITICAL_INTENSITY_THRESHOLD = 7

TOP_TOPICS_LIMIT = 5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def counts(items: Iterable[FeedbackItem]) -> SentimentCounts:
    """Tally items by sentiment."""
    tally: Dict[Sentiment, int] = {sentiment: 0 for sentiment in Sentiment}
    total = 0
    for item in items:
        tally[item.sentiment] += 1
        total += 1

    return SentimentCounts(
        total=total,
        positive=tally[Sentiment.POSITIVE],
        negative=tally[Sentiment.NEGATIVE],
        neutral=tally[Sentiment.NEUTRAL],
    )


def net_sentiment_score(items: Iterable[FeedbackItem]) -> int:
    """Positive minus negative share, on a -100 to +100 scale.

    Returns 0 for an empty collection.
    """
    tally = counts(items)
    if tally.total == 0:
        return 0
    return _round_half_up((tally.positive - tally.negative) * 100 / tally.total)


def positive_share(items: Iterable[FeedbackItem]) -> int:
    """Percentage of items that are positive, 0 for an empty collection."""
    tally = counts(items)
    if tally.total == 0:
        return 0
    return _round_half_up(tally.positive * 100 / tally.total)


def critical_issue_count(items: Iterable[FeedbackItem]) -> int:
    """Count negative items with intensity strictly above the threshold."""
    return sum(
        1 for item in items
        if item.sentiment == Sentiment.NEGATIVE and item.intensity > CRITICAL_INTENSITY_THRESHOLD
    )


def topic_frequency(items: Iterable[FeedbackItem], limit: int = TOP_TOPICS_LIMIT) -> List[Tuple[str, int]]:
    """Rank topics by how often they appear across all items.

    Topics match exactly (case-sensitive). Ties keep the order in which the
    topics were first seen.

    Args:
        items: Feedback items to scan
        limit: Number of topics to keep

    Returns:
        List of (topic, count) pairs, most frequent first
    """
    # Counter keeps first-insertion order and sorted() is stable
    tally = Counter(topic for item in items for topic in item.topics)
    ranked = sorted(tally.items(), key=lambda pair: -pair[1])
    return ranked[:limit]


def sentiment_distribution(items: Iterable[FeedbackItem]) -> List[Tuple[Sentiment, int]]:
    """Per-sentiment counts in display order: Positive, Neutral, Negative."""
    tally = counts(items)
    return [
        (Sentiment.POSITIVE, tally.positive),
        (Sentiment.NEUTRAL, tally.neutral),
        (Sentiment.NEGATIVE, tally.negative),
    ]


def build_dashboard_stats(items: Sequence[FeedbackItem]) -> DashboardStats:
    """Compute every overview statistic for the collection."""
    tally = counts(items)

    return DashboardStats(
        total=tally.total,
        positive=tally.positive,
        negative=tally.negative,
        neutral=tally.neutral,
        net_sentiment_score=net_sentiment_score(items),
        critical_issue_count=critical_issue_count(items),
        positive_share=positive_share(items),
        sentiment_distribution=[
            SentimentSlice(sentiment=sentiment, count=count)
            for sentiment, count in sentiment_distribution(items)
        ],
        top_topics=[
            TopicCount(topic=topic, count=count)
            for topic, count in topic_frequency(items)
        ],
    )
