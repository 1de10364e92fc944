from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from sparkline_view.errors import InvalidInputError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_series(values: Any) -> np.ndarray:
    """Copy `values` into a read-only 1-D float64 array of finite samples.

    The returned array never aliases the caller's container, so later edits to
    the source sequence are not observed by a render pass.
    """

    if values is None:
        arr = np.empty(0, dtype=np.float64)
    else:
        arr = _coerce_1d_numeric(values).copy()
    if arr.size:
        bad = np.flatnonzero(~np.isfinite(arr))
        if bad.size:
            idx = int(bad[0])
            raise InvalidInputError(f"series contains a non-finite sample at index {idx}: {arr[idx]!r}")
    arr.flags.writeable = False
    return arr


def _coerce_1d_numeric(value: Any) -> np.ndarray:
    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy())

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidInputError("series must be 1-D")
        return _coerce_ndarray(value)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if len(value) == 0:
            return np.empty(0, dtype=np.float64)
        return _coerce_ndarray(np.asarray(list(value), dtype=object))

    raise InvalidInputError(f"unsupported series input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.ndim != 1:
        raise InvalidInputError("series must be 1-D")
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if raw is None or isinstance(raw, (bool, str, bytes)):
            raise InvalidInputError(f"series contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except OverflowError as exc:
            raise InvalidInputError(f"series contains a non-finite sample at index {i}") from exc
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"series contains non-numeric value at index {i}: {raw!r}") from exc
    return out
