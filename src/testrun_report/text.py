"""
Text normalization for report display: escaping, durations, percentages and
argument rendering.
"""

from typing import Any, Iterable, List, Optional

from .exceptions import DivisionError
from .models import Char

MILLIS_MODES = ("remainder", "legacy")

_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    "&": "&amp;",
}


def _escape_char(character: str) -> str:
    return _ENTITIES.get(character, character)


def escape_plain(text: Optional[str]) -> Optional[str]:
    """
    Replace angle brackets, quotes, apostrophes and ampersands with entities.

    Existing entities are not recognised, so ``&amp;`` becomes ``&amp;amp;``.

    Args:
        text: Raw text, or None

    Returns:
        Escaped text, or None when ``text`` is None
    """
    if text is None:
        return None
    return "".join(_escape_char(ch) for ch in text)


def escape_display(text: Optional[str]) -> Optional[str]:
    """
    Escape like :func:`escape_plain` and keep line breaks and whitespace visible.

    Each newline becomes ``<br/>`` followed by a newline. In a run of
    consecutive spaces every space but the last becomes ``&nbsp;``, so the
    renderer can still wrap on the final one.
    """
    if text is None:
        return None

    parts: List[str] = []
    for i, ch in enumerate(text):
        if ch == " ":
            next_ch = text[i + 1] if i + 1 < len(text) else ""
            parts.append("&nbsp;" if next_ch == " " else " ")
        elif ch == "\n":
            parts.append("<br/>\n")
        else:
            parts.append(_escape_char(ch))
    return "".join(parts)


def _fraction_millis(elapsed: int, seconds: float, millis_mode: str) -> int:
    if millis_mode == "legacy":
        # Bitwise AND with 1000, not a remainder; kept for snapshot compatibility
        return int(seconds * 1000) & 1000
    return elapsed % 1000


def format_duration(elapsed: int, millis_mode: str = "remainder") -> str:
    """
    Render elapsed milliseconds as ``"<m>m <s>s <ms>ms"``.

    The minutes segment is omitted under 60 seconds and the seconds segment
    under one second. At one second or more the milliseconds segment is
    omitted when it is zero, which leaves a trailing space (``"1m 1s "``).

    Args:
        elapsed: Elapsed time in milliseconds
        millis_mode: ``"remainder"`` for the true millisecond remainder,
            ``"legacy"`` for the historical ``(seconds*1000) & 1000`` value

    Returns:
        Formatted duration
    """
    if millis_mode not in MILLIS_MODES:
        raise ValueError(f"millis_mode must be one of {MILLIS_MODES}: {millis_mode}")

    text = ""
    seconds = elapsed / 1000
    if seconds >= 60:
        text = f"{int(seconds) // 60}m "
        seconds = seconds % 60
    if seconds >= 1:
        text += f"{int(seconds)}s "
        millis = _fraction_millis(elapsed, seconds, millis_mode)
        if millis >= 1:
            text += f"{millis}ms"
    elif millis_mode == "legacy":
        text += f"{int(seconds * 1000)}ms"
    else:
        text += f"{elapsed % 60000 if elapsed >= 60000 else elapsed}ms"
    return text


def format_elapsed(start_millis: int, end_millis: int, millis_mode: str = "remainder") -> str:
    """Format the time between two millisecond timestamps."""
    return format_duration(end_millis - start_millis, millis_mode)


def format_percentage(numerator: int, denominator: int, decimals: int = 2) -> str:
    """
    Render ``numerator / denominator`` as a percentage, e.g. ``"66.67%"``.

    Raises:
        DivisionError: If ``denominator`` is zero
    """
    if denominator == 0:
        raise DivisionError(numerator)
    return f"{numerator / denominator:.{decimals}%}"


def render_argument(value: Any) -> str:
    """Render a parameter value with a hint of its type."""
    if value is None:
        return "null"
    if isinstance(value, Char):
        return f"'{value}'"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def comma_separate(strings: Iterable[str]) -> str:
    return ", ".join(strings)


def render_argument_list(values: Iterable[Any]) -> str:
    return comma_separate(render_argument(v) for v in values)


def strip_thread_name(thread_id: Optional[str]) -> Optional[str]:
    """
    Drop the numeric suffix from a compound ``name@id`` thread identifier.

    Only the last ``@`` separates the id, so names containing ``@`` survive.
    """
    if thread_id is None:
        return None
    index = thread_id.rfind("@")
    return thread_id[:index] if index >= 0 else thread_id
