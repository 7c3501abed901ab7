"""Entidad Vehicle - vehículo de la flota."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Vehicle:
    """
    Vehículo de la flota.

    El flag `available` es un interruptor administrativo independiente de las
    reservaciones: un vehículo disponible puede estar reservado en un rango
    dado, y uno no disponible no admite reservaciones nuevas.
    """

    id: str
    name: str
    price_per_day: Decimal
    available: bool = True
    location: str = ""
    category: str = "STANDARD"
    type: str = ""
    seats: int = 5

    created_at: datetime | None = None
    updated_at: datetime | None = None
