import asyncio
import logging
from typing import Callable, Dict, List, Optional, Tuple

from app.schemas.counter import IPCount
from app.services.counter_service import IPAddress, IPCounterStore

logger = logging.getLogger(__name__)

REPORT_HEADER = "IPs:"
REPORT_SEPARATOR = "-" * 25


def _print_block(text: str) -> None:
    print(text, flush=True)


def rank_counts(snapshot: Dict[IPAddress, int]) -> List[Tuple[IPAddress, int]]:
    """
    Sort snapshot entries by request count, highest first

    Parameters:
    - snapshot: IP to count mapping taken from the store

    Returns:
    - List of (ip, count) pairs; ties keep their snapshot order
    """
    return sorted(snapshot.items(), key=lambda item: item[1], reverse=True)


def ranked_entries(snapshot: Dict[IPAddress, int]) -> List[IPCount]:
    return [IPCount(ip=str(ip), count=count) for ip, count in rank_counts(snapshot)]


def format_report(entries: List[IPCount]) -> str:
    """
    Render one reporter tick

    Parameters:
    - entries: Ranked IP counts

    Returns:
    - Header line, one "<ip>: <count>" line per entry, separator line
    """
    lines = [REPORT_HEADER]
    lines.extend(str(entry) for entry in entries)
    lines.append(REPORT_SEPARATOR)
    return "\n".join(lines)


async def report_once(
        store: IPCounterStore,
        out: Callable[[str], None] = _print_block
) -> List[IPCount]:
    """
    Take a snapshot, rank it and write the report block

    Returns:
    - The ranked entries that were written
    """
    snapshot = await store.snapshot()
    entries = ranked_entries(snapshot)
    out(format_report(entries))
    return entries


async def run_reporter(
        store: IPCounterStore,
        interval: float = 1.0,
        stop_event: Optional[asyncio.Event] = None,
        out: Callable[[str], None] = _print_block
) -> None:
    """
    Report the IP table every interval seconds until stopped

    Parameters:
    - store: Counter store shared with the request path
    - interval: Seconds between ticks
    - stop_event: Ends the loop when set; cancelling the task also ends it
    - out: Sink for each report block
    """
    logger.info(f"Reporter started with {interval}s interval")

    try:
        while True:
            if stop_event is None:
                await asyncio.sleep(interval)
            else:
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=interval)
                    break
                except asyncio.TimeoutError:
                    pass

            await report_once(store, out)
    finally:
        logger.info("Reporter stopped")
