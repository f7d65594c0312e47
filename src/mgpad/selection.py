"""Sum the numbers found in a text selection, keeping their written precision."""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Iterable, Iterator, Optional

__all__ = [
    "ExtractedNumber",
    "SelectionSum",
    "extract_numbers",
    "format_decimal",
    "summarize_numbers",
    "summarize_selection",
]

# A token never starts right after a digit or a point: "1.2.3" gives 1.2 only,
# and the dash in "10-20" is a separator rather than a sign.
_NUMBER_PATTERN = re.compile(r"(?<![\d.])[+-]?(\d+)(?:\.(\d+))?")

_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


@dataclass(frozen=True)
class ExtractedNumber:
    """A number as written in the selection."""

    value: Decimal
    fraction_digits: int


@dataclass(frozen=True)
class SelectionSum:
    formatted: str
    total: Decimal
    fraction_digits: int
    count: int


def extract_numbers(text: str) -> Iterator[ExtractedNumber]:
    """Yield every number in ``text`` from left to right."""

    for match in _NUMBER_PATTERN.finditer(text):
        fraction = match.group(2) or ""
        yield ExtractedNumber(value=Decimal(match.group(0)), fraction_digits=len(fraction))


def format_decimal(value: Decimal, fraction_digits: int) -> str:
    """Render ``value`` as fixed point with exactly ``fraction_digits`` digits.

    Output never depends on the locale: ``.`` separates the fraction and no
    grouping is applied.
    """

    with localcontext(_EXACT):
        quantized = value.quantize(Decimal(1).scaleb(-fraction_digits), rounding=ROUND_HALF_UP)
    if quantized.is_zero():
        quantized = quantized.copy_abs()
    return format(quantized, "f")


def summarize_numbers(numbers: Iterable[ExtractedNumber]) -> Optional[SelectionSum]:
    """Add up ``numbers``; ``None`` means there was nothing to add."""

    total = Decimal(0)
    fraction_digits = 0
    count = 0
    with localcontext(_EXACT):
        for number in numbers:
            total += number.value
            fraction_digits = max(fraction_digits, number.fraction_digits)
            count += 1
    if count == 0:
        return None
    return SelectionSum(
        formatted=format_decimal(total, fraction_digits),
        total=total,
        fraction_digits=fraction_digits,
        count=count,
    )


def summarize_selection(text: str) -> Optional[SelectionSum]:
    return summarize_numbers(extract_numbers(text))
