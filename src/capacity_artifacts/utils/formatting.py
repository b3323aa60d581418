from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value) -> int:
    """ Deterministic integer rounding.
    - 0.5 always rounds away from zero (never banker's rounding)
    - Works on the exact binary value of the float
    """
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def fmt_coord(value, places: int = 1) -> str:
    """ Fixed-precision coordinate formatter.
    - Int / float -> exactly `places` decimals, half-up on the exact value
    - Negative zero -> positive zero
    """
    quantum = Decimal(1).scaleb(-places)
    text = str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
    if text.startswith("-") and Decimal(text) == 0:
        text = text[1:]
    return text


def fmt_percent(value):
    """ Whole-number percent label.
    - None -> 'N/A'
    - Float -> half-up integer with % sign
    """
    if value is None:
        return "N/A"
    return f"{round_half_up(value)}%"
