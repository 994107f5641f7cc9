from __future__ import annotations

from typing import Optional, Union


def format_number(value: Optional[Union[int, float]]) -> str:
    """
    Render a price for display: integral floats lose the trailing ".0",
    missing values read "n/a".
    """
    if value is None:
        return "n/a"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
