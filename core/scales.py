from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

LOG = logging.getLogger(__name__)


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    payload = {"event": event, **fields}
    logger.debug(json.dumps(payload, sort_keys=True, default=str))


def safe_float(value: Any, default: float = 0.0) -> float:
    try:
        v = float(value)
    except Exception:
        return default
    if math.isnan(v) or math.isinf(v):
        return default
    return v


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class LogScale:
    """Clamped logarithmic mapping from a positive domain onto a linear range.

    A degenerate domain (lo == hi) maps every value to the low end of the range.
    """

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: Any, label: Optional[str] = None) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        v = safe_float(value, d0)
        if v <= d0 or d1 <= d0:
            if v < d0:
                log_event(LOG, "scale_clamp", label=label, value=v, lo=d0)
            return r0
        if v >= d1:
            return r1
        t = (math.log(v) - math.log(d0)) / (math.log(d1) - math.log(d0))
        return r0 + (r1 - r0) * clamp(t, 0.0, 1.0)
