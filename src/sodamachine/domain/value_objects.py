# SPDX-License-Identifier: Apache-2.0
"""Domain value objects for SodaMachine.

Value Objects are immutable objects that are defined by their values rather
than their identity. Money and Soda never change in place; every "modify"
operation returns a new instance.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation
from enum import Enum
from typing import Optional, Union

# Signed 64-bit range for cent amounts
MAX_CENTS = 2**63 - 1
MIN_CENTS = -(2**63)

MAX_SODA_NAME_LENGTH = 50

DecimalLike = Union[Decimal, str, int, float]


class MoneyError(ValueError):
    """Base exception for money operations."""


class InvalidMoneyAmountError(MoneyError):
    """Raised when a money amount cannot be constructed."""


class MoneyOverflowError(MoneyError):
    """Raised when arithmetic would exceed the representable range."""

    def __init__(self, message: str = "Arithmetic overflow"):
        super().__init__(message)


class MoneyUnderflowError(MoneyError):
    """Raised when arithmetic would fall below the representable range."""

    def __init__(self, message: str = "Arithmetic underflow"):
        super().__init__(message)


class MoneyDivisionByZeroError(MoneyError):
    """Raised when dividing money by zero."""

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


def _checked_cents(cents: int) -> int:
    if cents > MAX_CENTS:
        raise MoneyOverflowError()
    if cents < MIN_CENTS:
        raise MoneyUnderflowError()
    return cents


def _to_decimal(value: DecimalLike) -> Decimal:
    """Convert user input to a finite Decimal."""
    if isinstance(value, bool):
        raise InvalidMoneyAmountError(f"Invalid amount: {value!r}")
    try:
        if isinstance(value, float):
            result = Decimal(str(value))
        elif isinstance(value, str):
            result = Decimal(value.strip())
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidMoneyAmountError(f"Invalid amount: {value!r}") from e

    if not result.is_finite():
        raise InvalidMoneyAmountError("Amount cannot be NaN or infinite")
    return result


def _scaled_cents(value: Decimal, factor: Decimal) -> int:
    """Multiply and round half-up to whole cents within the signed 64-bit range."""
    try:
        rounded = (value * factor).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except DecimalException as e:
        if value.is_signed() != factor.is_signed():
            raise MoneyUnderflowError() from e
        raise MoneyOverflowError() from e
    return _checked_cents(int(rounded))


@dataclass(frozen=True, order=True)
class Money:
    """Monetary amount stored as an exact number of cents.

    The value is signed so that differences can be represented; callers
    that require a non-negative balance validate it themselves.
    """

    cents: int

    def __post_init__(self):
        """Validate the cent amount."""
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise InvalidMoneyAmountError(
                f"Cents must be an integer, got {type(self.cents).__name__}"
            )
        _checked_cents(self.cents)

    @classmethod
    def from_dollars_cents(cls, dollars: int, cents: int) -> Money:
        """Create money from a whole-dollar and a cents part.

        Args:
            dollars: Dollar amount (may be negative)
            cents: Cents part, 0-99

        Returns:
            Money value object

        Raises:
            InvalidMoneyAmountError: If cents is outside 0-99
        """
        if not 0 <= cents <= 99:
            raise InvalidMoneyAmountError("Cents must be between 0 and 99")

        if dollars >= 0:
            return cls(dollars * 100 + cents)
        return cls(dollars * 100 - cents)

    @classmethod
    def from_decimal(cls, amount: DecimalLike) -> Money:
        """Create money from a decimal amount such as ``"5.25"``.

        The amount is rounded half-up to the nearest cent.

        Raises:
            InvalidMoneyAmountError: If the amount is not a finite number
            MoneyOverflowError: If the amount is too large to hold in cents
        """
        value = _to_decimal(amount)
        return cls(_scaled_cents(value, Decimal(100)))

    @classmethod
    def from_cents(cls, cents: int) -> Money:
        """Create money from a raw number of cents."""
        return cls(cents)

    @classmethod
    def zero(cls) -> Money:
        """Create a zero amount."""
        return cls(0)

    @property
    def dollars(self) -> int:
        """Dollar portion, truncated toward zero."""
        whole = abs(self.cents) // 100
        return -whole if self.cents < 0 else whole

    @property
    def cents_portion(self) -> int:
        """Cents portion (0-99) of the absolute amount."""
        return abs(self.cents) % 100

    def as_decimal(self) -> Decimal:
        """Exact decimal representation (e.g. ``Decimal("5.25")``)."""
        return Decimal(self.cents).scaleb(-2)

    @property
    def is_zero(self) -> bool:
        return self.cents == 0

    @property
    def is_positive(self) -> bool:
        return self.cents > 0

    @property
    def is_negative(self) -> bool:
        return self.cents < 0

    def abs(self) -> Money:
        return Money(abs(self.cents))

    def neg(self) -> Money:
        return Money(-self.cents)

    def __add__(self, other: Money) -> Money:
        """Add two amounts."""
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents + other.cents)

    def __sub__(self, other: Money) -> Money:
        """Subtract two amounts. The result may be negative."""
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents - other.cents)

    def __mul__(self, multiplier: int) -> Money:
        """Multiply by an integer scalar."""
        if isinstance(multiplier, bool) or not isinstance(multiplier, int):
            return NotImplemented
        return Money(self.cents * multiplier)

    __rmul__ = __mul__

    def __truediv__(self, divisor: int) -> Money:
        """Divide by an integer scalar, truncating toward zero."""
        if isinstance(divisor, bool) or not isinstance(divisor, int):
            return NotImplemented
        if divisor == 0:
            raise MoneyDivisionByZeroError()

        quotient = abs(self.cents) // abs(divisor)
        if (self.cents < 0) != (divisor < 0):
            quotient = -quotient
        return Money(quotient)

    def __str__(self) -> str:
        """Dollar formatted string, e.g. ``$5.25`` or ``-$2.50``."""
        sign = "-" if self.is_negative else ""
        return f"{sign}${abs(self.dollars)}.{self.cents_portion:02d}"

    def __repr__(self) -> str:
        return f"Money({self.cents})"


class SodaFlavor(Enum):
    """Available soda flavors."""

    COLA = "Cola"
    ORANGE = "Orange"
    LEMON_LIME = "Lemon-Lime"
    ROOT_BEER = "Root Beer"
    GRAPE = "Grape"
    CHERRY = "Cherry"
    VANILLA = "Vanilla"
    STRAWBERRY = "Strawberry"
    PEACH = "Peach"
    WATERMELON = "Watermelon"

    @classmethod
    def from_string(cls, value: str) -> Optional[SodaFlavor]:
        """Parse a flavor name case-insensitively.

        Accepts the display name ("Root Beer"), the enum name ("ROOT_BEER")
        and the name without separators ("rootbeer").
        """
        key = value.strip().lower().replace("_", "-")
        for flavor in cls:
            label = flavor.value.lower()
            aliases = (
                label,
                label.replace("-", "").replace(" ", ""),
                flavor.name.lower().replace("_", "-"),
            )
            if key in aliases:
                return flavor
        return None

    def __str__(self) -> str:
        return self.value


class SodaSize(Enum):
    """Available soda sizes with a fixed volume in ounces."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "x-large"

    @property
    def volume_ounces(self) -> int:
        return _SIZE_VOLUMES[self]

    @property
    def label(self) -> str:
        """Human readable label, e.g. ``Medium (12 oz)``."""
        return f"{_SIZE_NAMES[self]} ({self.volume_ounces} oz)"

    @classmethod
    def from_string(cls, value: str) -> Optional[SodaSize]:
        """Parse a size name or abbreviation (s, m, l, xl)."""
        return _SIZE_ALIASES.get(value.strip().lower())

    def __lt__(self, other: SodaSize) -> bool:
        if not isinstance(other, SodaSize):
            return NotImplemented
        return self.volume_ounces < other.volume_ounces

    def __le__(self, other: SodaSize) -> bool:
        if not isinstance(other, SodaSize):
            return NotImplemented
        return self.volume_ounces <= other.volume_ounces

    def __gt__(self, other: SodaSize) -> bool:
        if not isinstance(other, SodaSize):
            return NotImplemented
        return self.volume_ounces > other.volume_ounces

    def __ge__(self, other: SodaSize) -> bool:
        if not isinstance(other, SodaSize):
            return NotImplemented
        return self.volume_ounces >= other.volume_ounces

    def __str__(self) -> str:
        return self.label


_SIZE_VOLUMES = {
    SodaSize.SMALL: 8,
    SodaSize.MEDIUM: 12,
    SodaSize.LARGE: 16,
    SodaSize.XLARGE: 20,
}

_SIZE_NAMES = {
    SodaSize.SMALL: "Small",
    SodaSize.MEDIUM: "Medium",
    SodaSize.LARGE: "Large",
    SodaSize.XLARGE: "X-Large",
}

_SIZE_ALIASES = {
    "small": SodaSize.SMALL,
    "s": SodaSize.SMALL,
    "medium": SodaSize.MEDIUM,
    "m": SodaSize.MEDIUM,
    "large": SodaSize.LARGE,
    "l": SodaSize.LARGE,
    "x-large": SodaSize.XLARGE,
    "xlarge": SodaSize.XLARGE,
    "xl": SodaSize.XLARGE,
}


class SodaError(ValueError):
    """Base exception for soda validation errors."""


class InvalidSodaNameError(SodaError):
    """Raised when a soda name is empty or too long."""


class InvalidSodaPriceError(SodaError):
    """Raised when a soda price is not strictly positive."""


@dataclass(frozen=True)
class Soda:
    """A type of soda the machine can dispense.

    Enforces business rules: the name is trimmed and must be non-empty and at
    most 50 characters; the price must be strictly positive.
    """

    name: str
    flavor: SodaFlavor
    size: SodaSize
    price: Money
    is_diet: bool = False
    is_caffeinated: bool = False

    def __post_init__(self):
        """Validate and normalize soda attributes."""
        name = self.name.strip() if isinstance(self.name, str) else ""
        if not name:
            raise InvalidSodaNameError("Soda name cannot be empty")
        if len(name) > MAX_SODA_NAME_LENGTH:
            raise InvalidSodaNameError(
                f"Soda name cannot exceed {MAX_SODA_NAME_LENGTH} characters: {name[:20]}..."
            )
        object.__setattr__(self, "name", name)

        if not isinstance(self.price, Money) or not self.price.is_positive:
            raise InvalidSodaPriceError(f"Soda price must be positive, got {self.price}")

    @property
    def volume_ounces(self) -> int:
        """Volume in ounces for the soda size."""
        return self.size.volume_ounces

    def with_size(
        self, new_size: SodaSize, price_scale_factor: Optional[DecimalLike] = None
    ) -> Soda:
        """Create a soda with a different size and scaled price.

        Args:
            new_size: The new size
            price_scale_factor: Price multiplier. Defaults to the ratio of the
                new volume to the current volume.

        Returns:
            New Soda; the price is rounded half-up to the cent, minimum 1 cent

        Raises:
            InvalidSodaPriceError: If the factor is not a positive finite number
        """
        if price_scale_factor is None:
            factor = Decimal(new_size.volume_ounces) / Decimal(self.volume_ounces)
        else:
            try:
                factor = _to_decimal(price_scale_factor)
            except InvalidMoneyAmountError as e:
                raise InvalidSodaPriceError(f"Invalid price scale factor: {price_scale_factor!r}") from e

        if factor <= 0:
            raise InvalidSodaPriceError(f"Price scale factor must be positive, got {factor}")

        try:
            new_price = Money(max(_scaled_cents(Decimal(self.price.cents), factor), 1))
        except MoneyError as e:
            raise InvalidSodaPriceError(f"Scaled price out of range for factor {factor}") from e

        return replace(self, size=new_size, price=new_price)

    def with_price(self, new_price: Money) -> Soda:
        """Create a soda with a different price."""
        return replace(self, price=new_price)

    def is_same_type(self, other: Soda) -> bool:
        """Check whether two sodas are the same product, ignoring size and price."""
        return self.name == other.name and self.flavor == other.flavor

    def description(self) -> str:
        """Human readable description, e.g. ``Sprite Lemon-Lime - 8 oz (Caffeine-free)``."""
        diet_text = "Diet " if self.is_diet else ""
        caffeine_text = " (Caffeinated)" if self.is_caffeinated else " (Caffeine-free)"
        return f"{diet_text}{self.name} {self.flavor.value} - {self.volume_ounces} oz{caffeine_text}"

    def __str__(self) -> str:
        return self.description()
