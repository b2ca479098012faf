from decimal import ROUND_HALF_UP, Context, Decimal

from netspeed import glyphs
from netspeed.constants import SCALE_FACTOR, SPEED_UNITS
from netspeed.data.net_speed import RateSample


def precision(amount: float) -> int:
    """
    Number of decimal digits to show for an already scaled amount.
    """
    # Instead of showing 0.00123456 as 0.00, show it as 0.
    if amount >= 100 or amount < 0.01:
        # 100 M/s, 200 K/s, 300 B/s
        return 0
    elif amount >= 10:
        # 10.1 M/s, 20.2 K/s, 30.3 B/s
        return 1
    # 1.01 M/s, 2.02 K/s, 3.03 B/s
    return 2


def to_fixed(amount: float, digits: int) -> str:
    """
    Render amount with exactly `digits` decimals, ties rounded away from zero.
    """
    exponent = Decimal(1).scaleb(-digits)
    # Wide enough for the integer part of any saturated finite float
    context = Context(prec=400)
    return f"{Decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP, context=context):f}"


def format_speed(amount: float = 0.0) -> str:
    """
    Scale a rate in bytes/second to the largest SI unit it reaches and render
    it as e.g. "2.33 K/s". The ladder stops at the last unit.
    """
    unit_index = 0
    while amount >= SCALE_FACTOR and unit_index < len(SPEED_UNITS) - 1:
        amount /= SCALE_FACTOR
        unit_index += 1

    return f"{to_fixed(amount, precision(amount))} {SPEED_UNITS[unit_index]}"


def speed_label(rate: RateSample) -> str:
    return f"{glyphs.arrow_down} {format_speed(rate.down)} {glyphs.arrow_up} {format_speed(rate.up)}"
