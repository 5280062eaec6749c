"""
Decimal arithmetic for monetary values.

All arithmetic runs in a 20 significant digit context; results are cut to
their decimal places with an explicit rounding mode. Binary floats never
take part in a calculation: float inputs are converted through their
shortest repr first.
"""

from decimal import Context, Decimal, ROUND_HALF_UP

from apps.exchange.domain.models import Amount, RoundingMode

DECIMAL_PRECISION = 20

MONEY_CONTEXT = Context(prec=DECIMAL_PRECISION, rounding=ROUND_HALF_UP)

RoundingModeLike = RoundingMode | str


def to_decimal(value: Amount) -> Decimal:
    """
    Build a Decimal from an int, float, Decimal or numeric string.

    Raises decimal.InvalidOperation for strings that are not numbers and
    TypeError for unsupported types.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not amounts")
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, (int, str)):
        return Decimal(str(value).strip())
    raise TypeError(f"Unsupported amount type: {type(value).__name__}")


def quantize(
    value: Decimal,
    decimal_places: int = 2,
    rounding_mode: RoundingModeLike = RoundingMode.HALF_UP,
) -> Decimal:
    """Round value to a fixed number of decimal places."""
    mode = RoundingMode(rounding_mode)
    exponent = Decimal(1).scaleb(-decimal_places)
    # Quantizing must never be limited by the arithmetic precision
    context = Context(prec=max(DECIMAL_PRECISION, value.adjusted() + decimal_places + 2))
    return value.quantize(exponent, rounding=mode.decimal_rounding, context=context)


def to_plain_string(value: Decimal, strip_zeros: bool = False) -> str:
    """Render a Decimal without exponent notation."""
    if strip_zeros:
        digits = len(value.as_tuple().digits)
        value = value.normalize(Context(prec=max(DECIMAL_PRECISION, digits)))
    return format(value, "f")


def multiply(a: Decimal, b: Decimal) -> Decimal:
    return MONEY_CONTEXT.multiply(a, b)


def divide(a: Decimal, b: Decimal) -> Decimal:
    return MONEY_CONTEXT.divide(a, b)


def add(a: Decimal, b: Decimal) -> Decimal:
    return MONEY_CONTEXT.add(a, b)


def subtract(a: Decimal, b: Decimal) -> Decimal:
    return MONEY_CONTEXT.subtract(a, b)


class DecimalCalculations:
    """
    Pure calculation helpers.
    They need no rate store and can be used wherever a rate is already known.
    Results are returned as decimal strings.
    """

    @staticmethod
    def convert(
        amount: Amount,
        rate: Amount,
        decimal_places: int = 2,
        rounding_mode: RoundingModeLike = RoundingMode.HALF_UP,
    ) -> str:
        result = multiply(to_decimal(amount), to_decimal(rate))
        return to_plain_string(quantize(result, decimal_places, rounding_mode))

    @staticmethod
    def inverse_rate(rate: Amount, decimal_places: int = 6) -> str:
        inverse = divide(Decimal(1), to_decimal(rate))
        return to_plain_string(quantize(inverse, decimal_places, RoundingMode.HALF_UP))

    @staticmethod
    def add(a: Amount, b: Amount, decimal_places: int = 2) -> str:
        return to_plain_string(quantize(add(to_decimal(a), to_decimal(b)), decimal_places))

    @staticmethod
    def subtract(a: Amount, b: Amount, decimal_places: int = 2) -> str:
        return to_plain_string(quantize(subtract(to_decimal(a), to_decimal(b)), decimal_places))

    @staticmethod
    def multiply(amount: Amount, factor: Amount, decimal_places: int = 2) -> str:
        return to_plain_string(quantize(multiply(to_decimal(amount), to_decimal(factor)), decimal_places))

    @staticmethod
    def divide(amount: Amount, divisor: Amount, decimal_places: int = 2) -> str:
        return to_plain_string(quantize(divide(to_decimal(amount), to_decimal(divisor)), decimal_places))

    @staticmethod
    def compare(a: Amount, b: Amount) -> int:
        """Return -1 if a < b, 0 if a == b, 1 if a > b."""
        left, right = to_decimal(a), to_decimal(b)
        return (left > right) - (left < right)

    @staticmethod
    def equals(a: Amount, b: Amount, decimal_places: int = 2) -> bool:
        return quantize(to_decimal(a), decimal_places) == quantize(to_decimal(b), decimal_places)

    @staticmethod
    def round(
        amount: Amount,
        decimal_places: int = 2,
        rounding_mode: RoundingModeLike = RoundingMode.HALF_UP,
    ) -> str:
        return to_plain_string(quantize(to_decimal(amount), decimal_places, rounding_mode))

    @staticmethod
    def decimal(value: Amount) -> Decimal:
        return to_decimal(value)
