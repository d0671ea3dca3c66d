import configparser
import logging
from pathlib import Path

from engine.config import DESKTOP_HISTORY_LIMIT, MOBILE_HISTORY_LIMIT, SOLVER_MAX_STEPS, RuleConfig

LOGGER = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "rules"

VARIANT_ORDER = ("desktop", "mobile")
MAX_HISTORY_LIMIT = 500

DEFAULT_SETTINGS = {
    "variant": "desktop",
    "history_limit": str(DESKTOP_HISTORY_LIMIT),
    "count_draws": "true",
    "foundation_source": "false",
    "solver_max_steps": str(SOLVER_MAX_STEPS),
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _sanitize_bool(raw, default):
    value = str(raw).strip().lower()
    if value in _TRUE:
        return "true"
    if value in _FALSE:
        return "false"
    return default


def _sanitize_int(raw, default, low, high):
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    if value < low:
        value = low
    if value > high:
        value = high
    return str(value)


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if v not in (None, "")})

    variant = str(data["variant"]).strip().lower()
    if variant not in VARIANT_ORDER:
        variant = DEFAULT_SETTINGS["variant"]
    data["variant"] = variant

    # A variant preset only fills the fields the user did not set.
    if variant == "mobile":
        if not settings.get("history_limit"):
            data["history_limit"] = str(MOBILE_HISTORY_LIMIT)
        if not settings.get("foundation_source"):
            data["foundation_source"] = "true"

    data["history_limit"] = _sanitize_int(data["history_limit"], DEFAULT_SETTINGS["history_limit"],
                                          1, MAX_HISTORY_LIMIT)
    data["count_draws"] = _sanitize_bool(data["count_draws"], DEFAULT_SETTINGS["count_draws"])
    data["foundation_source"] = _sanitize_bool(data["foundation_source"], DEFAULT_SETTINGS["foundation_source"])
    data["solver_max_steps"] = _sanitize_int(data["solver_max_steps"], DEFAULT_SETTINGS["solver_max_steps"],
                                             1, 10 * SOLVER_MAX_STEPS)
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as e:
        LOGGER.warning("ignoring unreadable settings file %s: %s", SETTINGS_PATH, e)
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser[SECTION].get(key, "") for key in DEFAULT_SETTINGS}
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser[SECTION] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)


def to_rule_config(settings) -> RuleConfig:
    data = _sanitize(settings)
    return RuleConfig(
        history_limit=int(data["history_limit"]),
        count_draws=data["count_draws"] == "true",
        foundation_source=data["foundation_source"] == "true",
        solver_max_steps=int(data["solver_max_steps"]),
    )


def load_rule_config() -> RuleConfig:
    return to_rule_config(load_settings())
