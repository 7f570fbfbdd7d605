"""Seed feedback shown on a fresh dashboard."""
import datetime as dt
from typing import List

from .schemas import FeedbackItem, FeedbackSource, Sentiment
from .store import FeedbackStore

DEMO_FEEDBACK: List[FeedbackItem] = [
    FeedbackItem(
        id="1",
        source=FeedbackSource.REVIEW,
        text="The new UI is sleek, but I can't find the logout button anymore. It's really frustrating.",
        date=dt.date(2023, 10, 25),
        sentiment=Sentiment.NEGATIVE,
        emotion="Frustrated",
        intensity=7,
        topics=["UI/UX", "Navigation"],
        actionable_insight="Improve visibility of account management controls."
    ),
    FeedbackItem(
        id="2",
        source=FeedbackSource.TWITTER,
        text="Absolutely loving the new dark mode! Best update in years.",
        date=dt.date(2023, 10, 26),
        sentiment=Sentiment.POSITIVE,
        emotion="Excited",
        intensity=9,
        topics=["Dark Mode", "Design"],
        actionable_insight="Highlight dark mode in marketing materials."
    ),
    FeedbackItem(
        id="3",
        source=FeedbackSource.SUPPORT,
        text="My package was delayed by 3 days. The product is fine, but shipping needs work.",
        date=dt.date(2023, 10, 24),
        sentiment=Sentiment.NEUTRAL,
        emotion="Disappointed",
        intensity=5,
        topics=["Shipping", "Logistics"],
        actionable_insight="Investigate carrier delays in this region."
    ),
    FeedbackItem(
        id="4",
        source=FeedbackSource.EMAIL,
        text="Customer service agent was very rude when I asked for a refund.",
        date=dt.date(2023, 10, 23),
        sentiment=Sentiment.NEGATIVE,
        emotion="Angry",
        intensity=9,
        topics=["Customer Service", "Refunds"],
        actionable_insight="Review support ticket #4421 and retrain staff."
    ),
    FeedbackItem(
        id="5",
        source=FeedbackSource.REVIEW,
        text="Great value for money. Does exactly what it says on the box.",
        date=dt.date(2023, 10, 26),
        sentiment=Sentiment.POSITIVE,
        emotion="Satisfied",
        intensity=6,
        topics=["Pricing", "Value"],
        actionable_insight="Maintain current pricing strategy."
    ),
]


def seed_store(store: FeedbackStore) -> int:
    """Append the demo feedback to a store. Returns the number of items added."""
    for item in DEMO_FEEDBACK:
        store.append(item)
    return len(DEMO_FEEDBACK)
