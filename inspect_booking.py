#!/usr/bin/env python3
import asyncio
import logging
from datetime import datetime

from playwright.async_api import async_playwright

from book_padel import login
from config import SELECTORS, VIEWPORT, load_config
from slot_selector import compute_target_weekday, enumerate_candidates

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(message)s', datefmt='%H:%M:%S')
logger = logging.getLogger("Inspector")


async def run_visual_check():
    config = load_config()
    first_date = compute_target_weekday(datetime.now(), config.target_weekday, config.cutoff_hour)
    candidate = enumerate_candidates(first_date, config.preferred_times, config.duration_minutes)[0]

    async with async_playwright() as p:
        logger.info("👀 Launching VISUAL MODE")
        browser = await p.chromium.launch(headless=False, slow_mo=300)
        context = await browser.new_context(viewport=VIEWPORT, user_agent=config.user_agent)
        page = await context.new_page()

        try:
            await login(page, config)
            await page.goto(config.booking_url(candidate))
            await page.wait_for_selector(SELECTORS["timeslots"], timeout=10000)

            slot = page.locator(f'{SELECTORS["slot_btn"]}:has-text("{candidate.time_str}")').first
            if await slot.count():
                await slot.highlight()
                logger.info("-" * 30)
                logger.info(f"✅ Slot button for {candidate} highlighted. PAUSING.")
                logger.info("Check: date, playing time, slot enabled/disabled.")
                logger.info("-" * 30)
            else:
                logger.error(f"No slot button for {candidate.time_str} on {candidate.date_str}.")
            await page.pause()

        except Exception as e:
            logger.error(e)
            await page.pause()
        finally:
            await browser.close()


if __name__ == "__main__":
    asyncio.run(run_visual_check())
