"""
Motor de precios para rentas de vehículos.

Calcula:
- Días facturables a partir de la duración real (cualquier fracción de día
  cuenta como día completo, mínimo un día).
- Precio base (tarifa diaria × días).
- Descuento o recargo según la tarifa seleccionada.
- Desglose detallado del precio.

Es una función total: nunca lanza excepciones. Fechas ausentes o inválidas
producen un resultado en cero.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation

from app.domain.entities.reservation import Tariff

MICROSECONDS_PER_DAY = 24 * 60 * 60 * 1_000_000
ZERO = Decimal("0")


@dataclass(frozen=True)
class TariffConfig:
    """
    Configuración de una tarifa.

    rate positivo = descuento, rate negativo = recargo.
    """

    id: Tariff
    name: str
    description: str
    rate: Decimal


TARIFFS: tuple[TariffConfig, ...] = (
    TariffConfig(Tariff.BASIC, "Basic", "Standard", Decimal("0")),
    TariffConfig(Tariff.DISCOUNTED, "Discounted", "For students and seniors", Decimal("0.15")),
    TariffConfig(Tariff.EXCLUSIVE, "Exclusive", "Premium-Service", Decimal("-0.25")),
)

_TARIFFS_BY_ID = {tariff.id.value: tariff for tariff in TARIFFS}


@dataclass(frozen=True)
class PriceLine:
    description: str
    amount: Decimal


@dataclass(frozen=True)
class PriceCalculation:
    """Resultado estructurado de un cálculo de precio."""

    days: int = 0
    base_price: Decimal = ZERO
    tariff_adjustment: Decimal = ZERO
    total_price: Decimal = ZERO
    breakdown: tuple[PriceLine, ...] = field(default_factory=tuple)


def list_tariffs() -> list[TariffConfig]:
    """Retorna todas las tarifas configuradas."""
    return list(TARIFFS)


def get_tariff(tariff_id: str | Tariff | None) -> TariffConfig:
    """Busca una tarifa por id; si no existe retorna BASIC."""
    key = tariff_id.value if isinstance(tariff_id, Tariff) else tariff_id
    return _TARIFFS_BY_ID.get(key, TARIFFS[0])


def _to_datetime(value: date | datetime | str | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def rental_days(start: datetime, end: datetime) -> int:
    """
    Días facturables entre dos instantes.

    Regla de negocio: ceil(duración / 24h), con mínimo de un día.
    Ejemplo: 23 horas = 1 día, 25 horas = 2 días.
    """
    elapsed = end - start
    microseconds = (elapsed.days * 86_400 + elapsed.seconds) * 1_000_000 + elapsed.microseconds
    days = -(-microseconds // MICROSECONDS_PER_DAY)
    return max(1, days)


def _format_rate(rate: Decimal) -> str:
    return f"{abs(rate) * 100:.0f}"


def calculate_price(
    price_per_day: Decimal | float | int,
    start: date | datetime | str | None,
    end: date | datetime | str | None,
    tariff_id: str | Tariff | None,
) -> PriceCalculation:
    """
    Calcula el precio de una renta.

    Args:
        price_per_day: Tarifa diaria del vehículo (no negativa).
        start: Inicio de la renta.
        end: Fin de la renta.
        tariff_id: Identificador de tarifa (BASIC si es desconocido).

    Returns:
        PriceCalculation con precio base, ajuste de tarifa, total y desglose.
    """
    start_dt = _to_datetime(start)
    end_dt = _to_datetime(end)
    if start_dt is None or end_dt is None:
        return PriceCalculation()
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        return PriceCalculation()

    try:
        rate_per_day = Decimal(str(price_per_day))
    except (InvalidOperation, ValueError):
        return PriceCalculation()
    if not rate_per_day.is_finite():
        return PriceCalculation()

    days = rental_days(start_dt, end_dt)
    tariff = get_tariff(tariff_id)

    base_price = rate_per_day * days
    day_label = "day" if days == 1 else "days"
    breakdown = [
        PriceLine(
            description=f"Base price ({days} {day_label} × €{rate_per_day})",
            amount=base_price,
        )
    ]

    tariff_adjustment = ZERO
    total_price = base_price
    if tariff.rate != 0:
        tariff_adjustment = base_price * tariff.rate
        if tariff.rate > 0:
            breakdown.append(
                PriceLine(
                    description=f"{tariff.name} discount ({_format_rate(tariff.rate)}%)",
                    amount=-tariff_adjustment,
                )
            )
            total_price = base_price - tariff_adjustment
        else:
            breakdown.append(
                PriceLine(
                    description=f"{tariff.name} surcharge ({_format_rate(tariff.rate)}%)",
                    amount=abs(tariff_adjustment),
                )
            )
            total_price = base_price + abs(tariff_adjustment)

    return PriceCalculation(
        days=days,
        base_price=base_price,
        tariff_adjustment=tariff_adjustment,
        total_price=total_price,
        breakdown=tuple(breakdown),
    )
