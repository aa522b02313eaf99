# config.py
import os
from dataclasses import dataclass, field
from urllib.parse import quote

from dotenv import load_dotenv

from errors import ConfigError
from slot_selector import parse_times

# --- SITE ---
BASE_URL = "https://www.padelpowers.com"
LOGIN_PATH = "/rezervace/login?returnUrl=%2Fcourt-booking%2Fdetails%2F"
BOOKING_PATH = "/rezervace/court-booking/reservation/"

# --- BOOKING DEFAULTS ---
DEFAULT_LOCATION = "Smíchov"
DEFAULT_DURATION = 90
DEFAULT_PREFERRED_TIMES = "19:00,20:00"
WEDNESDAY = 2  # date.weekday()
# Today's target weekday is no longer eligible from this hour on.
DEFAULT_CUTOFF_HOUR = 19

# --- SYSTEM SETTINGS ---
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
VIEWPORT = {"width": 1920, "height": 1080}
SCREENSHOT_DIR = "screenshots"

# --- SELECTORS ---
# The email input is type="text", not type="email".
SELECTORS = {
    "email": 'input[type="text"].form-control',
    "password": 'input[type="password"].form-control',
    "login_btn": 'button[type="submit"].btn-primary',
    "login_error": '.error, .alert-danger, [class*="error"]',
    "cookie_consent": 'button:has-text("Souhlasím")',
    "timeslots": ".timeslots-container",
    "slot_btn": ".timeslots-container button.btn-outline-primary",
}

# Tried in order after a slot is picked; the first visible one is clicked.
CONFIRM_SELECTORS = [
    'button:has-text("Pokračovat")',
    'button:has-text("Rezervovat")',
    'button:has-text("Potvrdit")',
    'button[type="submit"]',
    'a:has-text("Pokračovat")',
]

FINAL_CONFIRM_SELECTOR = (
    'button:has-text("Dokončit"), '
    'button:has-text("Zaplatit"), '
    'button:has-text("Potvrdit rezervaci")'
)


@dataclass(frozen=True)
class BookingConfig:
    email: str
    password: str
    headless: bool = False
    location: str = DEFAULT_LOCATION
    duration_minutes: int = DEFAULT_DURATION
    preferred_times: tuple = field(default_factory=lambda: parse_times(DEFAULT_PREFERRED_TIMES))
    target_weekday: int = WEDNESDAY
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR
    base_url: str = BASE_URL
    user_agent: str = USER_AGENT
    screenshot_dir: str = SCREENSHOT_DIR

    def login_url(self):
        return f"{self.base_url}{LOGIN_PATH}"

    def booking_url(self, candidate):
        return (
            f"{self.base_url}{BOOKING_PATH}"
            f"?location={quote(self.location, safe='')}"
            f"&date={candidate.date_str}"
            f"&playingTimes={candidate.duration_minutes}"
        )

    def describe(self):
        times = ", ".join(t.strftime("%H:%M") for t in self.preferred_times)
        return (
            f"Location={self.location}, Duration={self.duration_minutes}min, "
            f"Times=[{times}], Headless={self.headless}"
        )


def _parse_duration(raw):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_DURATION
    return value if value > 0 else DEFAULT_DURATION


def _parse_int(env, name, default, low, high):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if not low <= value <= high:
        raise ConfigError(f"{name} must be between {low} and {high}, got {value}")
    return value


def load_config(env=None):
    """
    Build the run configuration from the environment.

    A `.env` file in the working directory is loaded first when reading the
    real process environment; an explicit `env` mapping is used as-is.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    email = env.get("EMAIL")
    password = env.get("PASSWORD")
    if not email or not password:
        raise ConfigError("EMAIL and PASSWORD must be set (environment or .env)")

    try:
        preferred_times = parse_times(env.get("PREFERRED_TIMES") or DEFAULT_PREFERRED_TIMES)
    except ValueError as e:
        raise ConfigError(f"PREFERRED_TIMES: {e}")
    if not preferred_times:
        raise ConfigError("PREFERRED_TIMES must name at least one time")

    return BookingConfig(
        email=email,
        password=password,
        headless=env.get("HEADLESS", "").strip().lower() == "true",
        location=env.get("LOCATION") or DEFAULT_LOCATION,
        duration_minutes=_parse_duration(env.get("DURATION")),
        preferred_times=preferred_times,
        target_weekday=_parse_int(env, "TARGET_WEEKDAY", WEDNESDAY, 0, 6),
        cutoff_hour=_parse_int(env, "CUTOFF_HOUR", DEFAULT_CUTOFF_HOUR, 0, 24),
        screenshot_dir=env.get("SCREENSHOT_DIR") or SCREENSHOT_DIR,
    )
