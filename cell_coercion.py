import datetime as dt
import re

import pandas as pd

_INT_RE = re.compile(r"[+-]?(0|[1-9][0-9]*)")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.[0-9]*|\.[0-9]+|[0-9]+(\.[0-9]*)?[eE][+-]?[0-9]+)")

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}
_FALSY = {"0", "false", "f", "no", "n", "off"}


def coerce_cell_text(text, original=None):
    """Turn edited text into a cell value, guided by the value it replaces."""
    text = "" if text is None else str(text)
    stripped = text.strip()
    if stripped == "":
        return None

    if isinstance(original, bool):
        lowered = stripped.lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        return text

    if isinstance(original, (dt.datetime, dt.date)):
        try:
            parsed = pd.to_datetime(stripped, errors="raise")
        except (ValueError, TypeError, OverflowError):
            return text
        if pd.isna(parsed):
            return text
        value = parsed.to_pydatetime()
        if type(original) is dt.date:
            return value.date()
        return value

    if _INT_RE.fullmatch(stripped):
        return int(stripped)
    if _FLOAT_RE.fullmatch(stripped):
        return float(stripped)

    return text
