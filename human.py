import asyncio
import logging
import random
from dataclasses import dataclass

logger = logging.getLogger("Booker")


@dataclass(frozen=True)
class HumanDelays:
    """Bounds (ms) for the randomized pauses between browser actions."""
    min_ms: int = 500
    max_ms: int = 1500
    typing_ms: int = 100


DEFAULT_DELAYS = HumanDelays()


def random_delay(min_ms=None, max_ms=None, rng=random):
    """Random whole number of milliseconds in [min_ms, max_ms]."""
    if min_ms is None:
        min_ms = DEFAULT_DELAYS.min_ms
    if max_ms is None:
        max_ms = DEFAULT_DELAYS.max_ms
    return rng.randint(min_ms, max_ms)


async def human_pause(min_ms=None, max_ms=None):
    delay = random_delay(min_ms, max_ms)
    logger.info(f"Pausing for {delay}ms (human-like delay)...")
    await asyncio.sleep(delay / 1000)


def _locator(page, target):
    return page.locator(target) if isinstance(target, str) else target


async def human_type(page, target, text):
    """Focus the field, then type one key at a time with jittered delays."""
    typing_low = DEFAULT_DELAYS.typing_ms // 2
    typing_high = DEFAULT_DELAYS.typing_ms + typing_low
    element = _locator(page, target)
    await element.click()
    await human_pause(200, 500)

    for char in text:
        await element.press_sequentially(char, delay=random_delay(typing_low, typing_high))

    await human_pause(300, 700)


async def human_click(page, target, before=(300, 800), after=(500, 1000)):
    """Hover first, hesitate, click, then give the page a moment."""
    element = _locator(page, target)
    await element.hover()
    await human_pause(*before)
    await element.click()
    await human_pause(*after)
