# config_manager.py
from pathlib import Path
import json

from . import error as E

config_json = Path(__file__).resolve().parent.parent / "config.json"


# Values used when config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "arena_capacity": 64 * 1024,
    "history_size": 64,
    "display_precision": 10,
    "display_max_length": 511,
    "max_functions": 8,
    "plot_x_min": -10.0,
    "plot_x_max": 10.0,
    "plot_steps": 20,
    "surface_range": 5.0,
    "surface_resolution": 60,
    "debug": False,
}



def _read_settings():
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}

    if not isinstance(settings_dict, dict):
        return {}
    return settings_dict


def load_setting_value(key_value):
    """Return one setting, or every setting merged over the defaults for "all"."""
    settings_dict = dict(DEFAULT_SETTINGS)
    settings_dict.update(_read_settings())

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value, 0))


def load_int_setting(key_value, minimum=0):
    """Read a numeric setting that must be an integer >= minimum."""
    value = load_setting_value(key_value)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise E.ConfigurationError(f"Invalid setting: {key_value}", code="5000")
    value = int(value)
    if value < minimum:
        raise E.ConfigurationError(f"Invalid setting: {key_value}", code="5000")
    return value


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        raise E.ConfigurationError(f"Not all Settings could be saved: {config_json}", code="5001")
