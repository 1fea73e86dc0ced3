import csv
import logging
from pathlib import Path

from tradescope.marketdata.candle import Candle

log = logging.getLogger(__name__)


def read_candles_csv(path: Path | str) -> list[Candle]:
    """
    Read candles from a ``timestamp,open,high,low,close,volume`` CSV file.

    ``volume`` is optional. Timestamps may be ISO strings or epoch
    milliseconds. Rows are returned in file order; ordering is validated
    when they are added to a ``TimeSeries``.
    """
    p = Path(path)
    candles: list[Candle] = []
    with p.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line, row in enumerate(reader, start=2):
            try:
                candles.append(
                    Candle(
                        timestamp=row["timestamp"],
                        open=float(row["open"]),
                        high=float(row["high"]),
                        low=float(row["low"]),
                        close=float(row["close"]),
                        volume=float(row.get("volume") or 0.0),
                    )
                )
            except (KeyError, ValueError) as e:
                raise ValueError(f"{p}:{line}: invalid candle row: {e}") from e

    log.debug("Read %d candles from %s", len(candles), p)
    return candles
