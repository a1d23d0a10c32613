"""
Decimal Math — точная fixed-point арифметика для комиссий

Модель чисел повторяет on-chain Decimal: 18 знаков после запятой,
целочисленное представление (atomics) и умножение с усечением вниз.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float не используется нигде: только decimal.Decimal и int
2. Умножение amount * rate всегда усекает к нулю (комиссия не округляется вверх)
3. Вычитание никогда не уходит в минус (FeeArithmeticError вместо clamp)
4. Результат должен помещаться в Uint128
"""

from decimal import Decimal
from typing import Final

from ledger_config.core.errors import FeeArithmeticError, InvalidDecimal

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Число знаков после запятой у fixed-point Decimal
DECIMAL_PLACES: Final[int] = 18

# 10^18 — масштаб atomics
DECIMAL_FRACTIONAL: Final[int] = 10**DECIMAL_PLACES

# Максимальное значение количества токенов
UINT128_MAX: Final[int] = 2**128 - 1

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)


# =============================================================================
# ПРЕОБРАЗОВАНИЯ
# =============================================================================


def to_atomics(value: Decimal) -> int:
    """
    Decimal → целое число atomics (value * 10^18).

    Args:
        value: Неотрицательный Decimal с не более чем 18 знаками после запятой

    Returns:
        Целое представление value

    Raises:
        InvalidDecimal: Если value отрицательный, не конечный или слишком точный

    Examples:
        >>> to_atomics(Decimal("0.01"))
        10000000000000000
    """
    if not value.is_finite():
        raise InvalidDecimal(f"Decimal must be finite, got {value}")
    if value < 0:
        raise InvalidDecimal(f"Decimal must be non-negative, got {value}")

    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent < -DECIMAL_PLACES:
        # Хвостовые нули после 18-го знака допустимы
        normalized = value.normalize()
        if normalized.as_tuple().exponent < -DECIMAL_PLACES:
            raise InvalidDecimal(
                f"Decimal {value} has more than {DECIMAL_PLACES} fractional digits"
            )
        value = normalized

    _, digits, exp = value.as_tuple()
    coefficient = int("".join(map(str, digits))) if digits else 0
    return coefficient * 10 ** (exp + DECIMAL_PLACES)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def mul_floor(amount: int, rate: Decimal) -> int:
    """
    Умножение целого количества на Decimal с усечением вниз.

    floor(amount * rate), вычисляется в целых числах без потери точности.

    Args:
        amount: Количество токенов (0 <= amount <= UINT128_MAX)
        rate: Множитель (fee_rate или вес получателя)

    Returns:
        Усечённое произведение

    Raises:
        ValueError: Если amount вне диапазона Uint128
        OverflowError: Если результат не помещается в Uint128

    Examples:
        >>> mul_floor(100, Decimal("0.01"))
        1
        >>> mul_floor(99, Decimal("0.01"))
        0
    """
    validate_amount(amount)
    result = amount * to_atomics(rate) // DECIMAL_FRACTIONAL
    if result > UINT128_MAX:
        raise OverflowError(f"Product {amount} * {rate} overflows Uint128")
    return result


def checked_sub(minuend: int, subtrahend: int, denom: str = "") -> int:
    """
    Вычитание без underflow.

    Raises:
        FeeArithmeticError: Если subtrahend > minuend
    """
    if subtrahend > minuend:
        raise FeeArithmeticError(minuend, subtrahend, denom)
    return minuend - subtrahend


def decimal_sum(values) -> Decimal:
    """Точная сумма Decimal-значений (пустая сумма = 0)."""
    total = ZERO
    for value in values:
        total += value
    return total


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(amount: int) -> None:
    """
    Проверка, что количество — целое в диапазоне Uint128.

    Raises:
        ValueError: Если amount не int, отрицательный или больше UINT128_MAX
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Amount must be an integer, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    if amount > UINT128_MAX:
        raise ValueError(f"Amount {amount} exceeds Uint128 maximum")
