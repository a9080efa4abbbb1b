"""Auto-hide threshold lookup.

``AUTO_HIDE_THRESHOLD`` from the environment wins over the ``[custom]`` entry
of ``domain.toml``, which wins over the built-in default.
"""

import os

from protean.exceptions import ConfigurationError
from protean.utils.globals import current_domain

DEFAULT_AUTO_HIDE_THRESHOLD = 10
THRESHOLD_SETTING = "AUTO_HIDE_THRESHOLD"


def _parse_threshold(raw, source) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{THRESHOLD_SETTING} from {source} must be an integer, got {raw!r}") from exc
    if isinstance(raw, bool) or value < 1:
        raise ConfigurationError(f"{THRESHOLD_SETTING} from {source} must be a positive integer, got {raw!r}")
    return value


def auto_hide_threshold() -> int:
    raw = os.environ.get(THRESHOLD_SETTING)
    if raw not in (None, ""):
        return _parse_threshold(raw, "environment")

    custom = current_domain.config.get("custom") or {}
    if custom.get(THRESHOLD_SETTING) is not None:
        return _parse_threshold(custom[THRESHOLD_SETTING], "domain config")

    return DEFAULT_AUTO_HIDE_THRESHOLD
