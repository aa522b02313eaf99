#!/usr/bin/env python3
import asyncio
import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from playwright.async_api import async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from config import (
    CONFIRM_SELECTORS,
    FINAL_CONFIRM_SELECTOR,
    SELECTORS,
    VIEWPORT,
    load_config,
)
from errors import ConfigError, LoginFailed, NetworkTimeout, SelectorNotFound, SlotDisabled
from human import human_click, human_pause, human_type
from screenshots import take_screenshot
from slot_selector import compute_target_weekday, enumerate_candidates

logger = logging.getLogger("Booker")

LOG_FILE = "booking.log"


# --- LOGGING SETUP ---

def setup_logging(log_file=LOG_FILE):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )


# --- UTILITY FUNCTIONS ---

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Padel Powers weekly court booker")
    parser.add_argument("--dry-run", action="store_true", help="Find a free slot but do NOT click it")
    parser.add_argument("--headed", action="store_true", help="Show the browser even if HEADLESS=true")
    return parser.parse_args(argv)


def candidate_label(candidate):
    return f"{candidate.date_str}-{candidate.time.strftime('%H%M')}"


# --- BROWSER ACTIONS ---

async def handle_cookie_consent(page):
    consent = page.locator(SELECTORS["cookie_consent"]).first
    try:
        await consent.wait_for(state="visible", timeout=3000)
    except PlaywrightError:
        logger.info("No cookie consent banner found or already accepted")
        return

    logger.info("🍪 Cookie consent banner found, accepting...")
    await human_pause(500, 1000)
    await human_click(page, consent, before=(300, 600), after=(800, 1200))
    logger.info("Cookie consent accepted")


async def login(page, config):
    logger.info("🔑 Navigating to login page...")
    try:
        await page.goto(config.login_url(), timeout=60000)
        await page.wait_for_load_state("domcontentloaded")
    except PlaywrightTimeoutError as e:
        raise NetworkTimeout(f"Login page did not load: {e}")
    await human_pause(1000, 2000)

    await handle_cookie_consent(page)

    logger.info("📝 Filling login credentials...")
    try:
        await page.wait_for_selector(SELECTORS["email"], timeout=10000)
    except PlaywrightTimeoutError:
        raise SelectorNotFound(f"Login form not found ({SELECTORS['email']})")

    await human_type(page, SELECTORS["email"], config.email)
    await human_type(page, SELECTORS["password"], config.password)
    await take_screenshot(page, "before-login", config.screenshot_dir)

    await human_pause(500, 1000)
    logger.info("Submitting login form...")
    await human_click(page, SELECTORS["login_btn"])

    try:
        await page.wait_for_load_state("load", timeout=30000)
    except PlaywrightTimeoutError as e:
        raise NetworkTimeout(f"Page did not load after login: {e}")
    await human_pause(1000, 2000)
    await take_screenshot(page, "after-login", config.screenshot_dir)

    if "login" in page.url:
        try:
            message = await page.locator(SELECTORS["login_error"]).first.text_content(timeout=2000)
        except PlaywrightTimeoutError:
            message = None
        raise LoginFailed(f"Still on login page. Error: {(message or '').strip() or 'Unknown'}")

    logger.info("✅ Login successful!")


async def is_slot_disabled(slot):
    return await slot.evaluate(
        '(el) => el.disabled || el.classList.contains("disabled") || el.hasAttribute("disabled")'
    )


async def click_confirmation(page):
    for selector in CONFIRM_SELECTORS:
        button = page.locator(selector).first
        try:
            await button.wait_for(state="visible", timeout=2000)
        except PlaywrightTimeoutError:
            continue
        logger.info("🖱️ Clicking confirmation button...")
        await human_click(page, button, before=(500, 1000), after=(2000, 3000))
        return True
    return False


async def click_final_confirmation(page, label, config):
    button = page.locator(FINAL_CONFIRM_SELECTOR).first
    try:
        await button.wait_for(state="visible", timeout=5000)
    except PlaywrightTimeoutError:
        logger.info("No final confirmation button found or booking already completed")
        return False

    logger.info("Found final confirmation button. Completing booking...")
    await human_pause(1000, 2000)
    await human_click(page, button, before=(700, 1200), after=(3000, 4000))
    await take_screenshot(page, f"final-confirmation-{label}", config.screenshot_dir)
    return True


async def try_booking(page, candidate, config, dry_run=False):
    """
    Attempt to reserve one candidate.

    Returns False when the time is not offered at all. Raises SlotDisabled
    when it is offered but taken, SelectorNotFound / NetworkTimeout when the
    page does not behave.
    """
    label = candidate_label(candidate)
    logger.info(f"🎾 Attempting to book {candidate.date_str} at {candidate.time_str}...")

    try:
        await page.goto(config.booking_url(candidate), timeout=60000)
        await page.wait_for_load_state("domcontentloaded")
    except PlaywrightTimeoutError as e:
        raise NetworkTimeout(f"Booking page for {candidate.date_str} did not load: {e}")
    await human_pause(1500, 2500)

    await take_screenshot(page, f"booking-page-{label}", config.screenshot_dir)

    # Slot buttons read like "19:00  1 350,00 Kč".
    logger.info(f"🔍 Looking for time slot button containing \"{candidate.time_str}\"...")
    try:
        await page.wait_for_selector(SELECTORS["timeslots"], timeout=10000)
    except PlaywrightTimeoutError:
        raise SelectorNotFound(f"No timeslots on {candidate.date_str}")
    await human_pause(800, 1500)

    slot = page.locator(f'{SELECTORS["slot_btn"]}:has-text("{candidate.time_str}")').first
    if await slot.count() == 0:
        logger.info(f"Time slot {candidate.time_str} not found on {candidate.date_str}")
        return False

    if await is_slot_disabled(slot):
        raise SlotDisabled(f"Time slot {candidate.time_str} is disabled/unavailable on {candidate.date_str}")

    if dry_run:
        logger.info(f"🛑 DRY RUN: {candidate} is free. Skipping click.")
        return True

    logger.info(f"Found available slot at {candidate.time_str} on {candidate.date_str}. Booking...")
    await human_click(page, slot, before=(400, 900), after=(2000, 3500))
    await take_screenshot(page, f"after-selecting-slot-{label}", config.screenshot_dir)

    await click_confirmation(page)
    await take_screenshot(page, f"booking-confirmation-{label}", config.screenshot_dir)

    try:
        await page.wait_for_load_state("load", timeout=15000)
    except PlaywrightTimeoutError:
        logger.info("Page still loading, but continuing...")

    await click_final_confirmation(page, label, config)

    logger.info(f"✅ Successfully booked court for {candidate.date_str} at {candidate.time_str}!")
    return True


async def book_first_available(page, candidates, config, dry_run=False):
    """Walk the candidates in order; return the first one booked, or None."""
    first_date = candidates[0].date if candidates else None
    announced_fallback = False

    for candidate in candidates:
        if candidate.date != first_date and not announced_fallback:
            logger.info("First week slots not available. Trying the following week...")
            logger.info(f"📅 Target date (second attempt): {candidate.date_str}")
            announced_fallback = True

        try:
            if await try_booking(page, candidate, config, dry_run=dry_run):
                return candidate
        except LoginFailed:
            raise
        except SlotDisabled as e:
            logger.info(str(e))
        except Exception as e:
            logger.error(f"❌ Error trying to book {candidate.time_str} on {candidate.date_str}: {e}")
            await take_screenshot(page, f"error-{candidate_label(candidate)}", config.screenshot_dir)

    return None


async def run(config, now=None, dry_run=False):
    now = now or datetime.now()
    first_date = compute_target_weekday(now, config.target_weekday, config.cutoff_hour)
    candidates = enumerate_candidates(first_date, config.preferred_times, config.duration_minutes)
    logger.info(f"📅 Target date (first attempt): {first_date.isoformat()}")

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.headless)
        context = await browser.new_context(viewport=VIEWPORT, user_agent=config.user_agent)
        await context.tracing.start(screenshots=True, snapshots=True)
        page = await context.new_page()
        trace_path = None

        try:
            await login(page, config)

            booked = await book_first_available(page, candidates, config, dry_run=dry_run)
            if booked is None:
                logger.warning("❌ No available slots found for the next two weeks")

            if not config.headless:
                logger.info("Keeping browser open for 5 seconds...")
                await page.wait_for_timeout(5000)
            return booked

        except Exception:
            Path(config.screenshot_dir).mkdir(parents=True, exist_ok=True)
            trace_path = str(Path(config.screenshot_dir) / "trace_error.zip")
            raise
        finally:
            try:
                await context.tracing.stop(path=trace_path)
            except PlaywrightError as e:
                logger.warning(f"⚠️ Could not save trace: {e}")
            finally:
                await browser.close()


def main(argv=None):
    args = parse_args(argv)
    setup_logging()
    logger.info("=== Padel Reservation Bot Starting ===")

    try:
        config = load_config()
        if args.headed:
            config = replace(config, headless=False)
        logger.info(f"🚀 START | {config.describe()}")
        asyncio.run(run(config, dry_run=args.dry_run))
    except ConfigError as e:
        logger.error(f"💥 CONFIG ERROR: {e}")
        return 1
    except LoginFailed as e:
        logger.error(f"💥 LOGIN FAILED: {e}")
        return 1
    except Exception as e:
        logger.exception(f"💥 ERROR: {e}")
        return 1
    finally:
        logger.info("=== Padel Reservation Bot Finished ===")

    return 0


if __name__ == "__main__":
    sys.exit(main())
