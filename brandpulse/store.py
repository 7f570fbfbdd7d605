"""In-memory feedback store and the process-scoped dashboard state."""
import logging
from typing import Callable, List, Optional, Tuple

from .schemas import CompanyProfile, ExecutiveSummary, FeedbackItem

logger = logging.getLogger(__name__)

StoreObserver = Callable[[FeedbackItem], None]


class FeedbackStore:
    """Append-only, ordered collection of feedback items.

    Design decisions:
    - Single source of truth for every derived view
    - No removal, no dedup by id, no size cap
    - Readers get a snapshot, never the live list
    """

    def __init__(self, items: Optional[List[FeedbackItem]] = None):
        self._items: List[FeedbackItem] = list(items or [])
        self._observers: List[StoreObserver] = []

    def append(self, item: FeedbackItem) -> None:
        """Add an item to the end of the collection and notify observers.

        Args:
            item: Fully constructed feedback item
        """
        self._items.append(item)

        for observer in list(self._observers):
            try:
                observer(item)
            except Exception as e:
                logger.error(f"Store observer failed for item {item.id}: {e}")

    def all(self) -> Tuple[FeedbackItem, ...]:
        """Return every item in insertion order."""
        return tuple(self._items)

    def recent(self, limit: Optional[int] = None) -> List[FeedbackItem]:
        """Return items most-recent-first, as the activity feed shows them.

        Args:
            limit: Maximum number of items to return (all when None)

        Returns:
            List of feedback items, newest append first
        """
        items = self._items[::-1]
        if limit is not None:
            items = items[:max(limit, 0)]
        return items

    def subscribe(self, observer: StoreObserver) -> Callable[[], None]:
        """Register a callback invoked with each appended item.

        Returns:
            A function that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._items)


class DashboardState:
    """Shared state for one dashboard session.

    Holds the feedback store, the company profile and the most recent
    executive summary, which each new report replaces.
    """

    def __init__(self, store: Optional[FeedbackStore] = None, profile: Optional[CompanyProfile] = None):
        self.store = store if store is not None else FeedbackStore()
        self._profile = profile if profile is not None else CompanyProfile()
        self.latest_summary: Optional[ExecutiveSummary] = None

    @property
    def profile(self) -> CompanyProfile:
        return self._profile

    def set_profile(self, profile: CompanyProfile) -> None:
        """Replace the company profile wholesale."""
        self._profile = profile
        logger.info(f"Company profile updated: {profile.name or '(unnamed)'}")
