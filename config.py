import json
import logging
from pathlib import Path

DEFAULT_CONFIG = {
    "alpha": 0.4,               # smoothing factor of the human skill estimate
    "initial_estimate": 0.5,    # skill estimate at the start of every game
    "max_depth": 4,             # tree layers below the root ply
    "computer_delay": 1.0,      # seconds before the computer replies (console driver)
    "log_level": "INFO",
}


def load_config(path: str = "config.json") -> dict:
    p = Path(path)
    if not p.exists():
        return DEFAULT_CONFIG.copy()
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logging.getLogger(__name__).warning(f"Ignoring unreadable config {p}: {e}")
        return DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        logging.getLogger(__name__).warning(f"Ignoring config {p}: expected a JSON object")
        return DEFAULT_CONFIG.copy()
    # Merge with defaults (shallow merge)
    merged = DEFAULT_CONFIG.copy()
    merged.update({k: v for k, v in data.items() if v is not None})
    return merged
