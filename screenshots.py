import logging
import time
from pathlib import Path

logger = logging.getLogger("Booker")


async def take_screenshot(page, label, directory):
    """
    Save a full-page screenshot as <label>-<epoch ms>.png.

    Debug output only: failures are logged and swallowed, never raised.
    """
    try:
        folder = Path(directory)
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / f"{label}-{int(time.time() * 1000)}.png"
        await page.screenshot(path=str(path), full_page=True)
    except Exception as e:
        logger.warning(f"⚠️ Screenshot '{label}' failed: {e}")
        return None

    logger.info(f"📸 Screenshot saved: {path}")
    return path
