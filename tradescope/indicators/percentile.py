from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from tradescope.indicators.types import IndicatorType
    from tradescope.marketdata.candle import Candle


def percent_rank(
    segment: Sequence[Candle], source: IndicatorType, lookback: int
) -> Optional[float]:
    """
    Share of the ``lookback`` source values before the last candle that are
    strictly below the last candle's value.

    Returns None unless the full lookback plus the current value are
    computable. The result is in [0, 1].
    """
    if len(segment) < lookback + 1:
        return None
    values = []
    for candle in segment[-(lookback + 1):]:
        entry = candle.indicators.get(source)
        value = entry.scalar() if entry is not None else None
        if value is None:
            return None
        values.append(value)
    arr = np.array(values, dtype=np.float64)
    return float(np.count_nonzero(arr[:-1] < arr[-1])) / lookback
