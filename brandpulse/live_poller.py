"""Simulated live feed: synthesize, classify and store feedback on a timer."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Set, Union

from .config import config
from .ingestion import ClassifierFn, ingest
from .schemas import CompanyProfile, FeedbackItem, LiveStatus, SyntheticFeedback, coerce_source
from .store import DashboardState

logger = logging.getLogger(__name__)

GeneratorFn = Callable[[CompanyProfile], Awaitable[Union[SyntheticFeedback, Mapping[str, Any]]]]
SleepFn = Callable[[float], Awaitable[Any]]


class LivePoller:
    """Cancellable repeating task that feeds synthetic feedback into the store.

    Ticks are issued every ``interval`` seconds measured from the previous
    issue, not from its completion, so slow cycles can overlap and finish
    out of order. Stopping only cancels future ticks: cycles already in
    flight run to completion and still append their record.
    """

    def __init__(
        self,
        state: DashboardState,
        generate: GeneratorFn,
        classify: ClassifierFn,
        interval: Optional[float] = None,
        sleep: SleepFn = asyncio.sleep
    ):
        """Initialize the poller.

        Args:
            state: Dashboard state whose store receives the records
            generate: Async generator call returning text and source
            classify: Async classifier handed to the ingestion pipeline
            interval: Seconds between ticks (default from config)
            sleep: Awaitable sleep, replaceable for deterministic tests
        """
        self.state = state
        self.interval = interval if interval is not None else config.LIVE_POLL_INTERVAL_SECONDS
        self._generate = generate
        self._classify = classify
        self._sleep = sleep
        self._schedule_task: Optional[asyncio.Task] = None
        self._cycles: Set[asyncio.Task] = set()
        self.completed_ticks = 0
        self.skipped_ticks = 0

    @property
    def is_live(self) -> bool:
        return self._schedule_task is not None and not self._schedule_task.done()

    @property
    def in_flight(self) -> int:
        return len(self._cycles)

    def status(self) -> LiveStatus:
        return LiveStatus(
            is_live=self.is_live,
            in_flight=self.in_flight,
            completed_ticks=self.completed_ticks,
            skipped_ticks=self.skipped_ticks,
            interval_seconds=self.interval
        )

    def start(self) -> bool:
        """Turn the live feed on. The first tick is issued right away.

        Must be called from inside a running event loop.

        Returns:
            False if the feed was already live
        """
        if self.is_live:
            return False

        self._schedule_task = asyncio.get_running_loop().create_task(self._schedule())
        logger.info(f"Live feed started (every {self.interval}s)")
        return True

    def stop(self) -> bool:
        """Turn the live feed off. In-flight cycles are left to finish.

        Returns:
            False if the feed was not live
        """
        if not self.is_live:
            self._schedule_task = None
            return False

        self._schedule_task.cancel()
        self._schedule_task = None
        logger.info(f"Live feed stopped ({self.in_flight} cycles still in flight)")
        return True

    async def drain(self) -> None:
        """Wait until every in-flight cycle has finished."""
        while self._cycles:
            await asyncio.gather(*list(self._cycles), return_exceptions=True)

    async def _schedule(self) -> None:
        while True:
            self._issue_tick()
            await self._sleep(self.interval)

    def _issue_tick(self) -> None:
        task = asyncio.get_running_loop().create_task(self.run_cycle())
        self._cycles.add(task)
        task.add_done_callback(self._cycles.discard)

    async def run_cycle(self) -> Optional[FeedbackItem]:
        """Run one tick: synthesize a text, classify it, append the record.

        A failed synthesis skips the tick without storing anything.
        Classification failures still store the ingestion sentinel.

        Returns:
            The appended item, or None when the tick was skipped
        """
        profile = self.state.profile

        try:
            synthetic = await self._generate(profile)
            if not isinstance(synthetic, SyntheticFeedback):
                synthetic = SyntheticFeedback.model_validate(synthetic)
        except Exception as e:
            self.skipped_ticks += 1
            logger.warning(f"Live feed tick skipped, synthesis failed: {e}")
            return None

        item = await ingest(
            synthetic.text,
            profile,
            self._classify,
            source=coerce_source(synthetic.source)
        )
        self.state.store.append(item)
        self.completed_ticks += 1
        logger.debug(f"Live feed appended item {item.id}")
        return item
