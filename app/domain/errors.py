"""Excepciones de dominio para el sistema de reservaciones de vehículos."""

from datetime import date


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    @property
    def details(self) -> dict:
        """Datos adicionales para explicar el rechazo al cliente."""
        return {}


# === Errores de Autorización ===


class UnauthorizedError(DomainError):
    """El llamante no tiene el rol requerido."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message=message, code="UNAUTHORIZED")


class AccessDeniedError(UnauthorizedError):
    """El llamante no es dueño del recurso ni pertenece al staff."""

    def __init__(self, reservation_id: str):
        super().__init__(message=f"Acceso denegado a la reservación {reservation_id}")
        self.code = "ACCESS_DENIED"
        self.reservation_id = reservation_id


# === Errores de Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validación fallida en '{field}': {message}",
            code="INVALID_INPUT",
        )
        self.field = field

    @property
    def details(self) -> dict:
        return {"field": self.field}


class InvalidDateRangeError(ValidationError):
    """Rango de fechas inválido (inicio debe ser anterior al fin)."""

    def __init__(self, start: date, end: date):
        super().__init__(
            field="end_date",
            message=f"la fecha de fin debe ser posterior a la de inicio: {start} >= {end}",
        )
        self.start = start
        self.end = end


# === Errores de Recursos ===


class NotFoundError(DomainError):
    """El recurso referenciado no existe."""

    def __init__(self, message: str):
        super().__init__(message=message, code="NOT_FOUND")


class VehicleNotFoundError(NotFoundError):
    """El vehículo no existe."""

    def __init__(self, vehicle_id: str):
        super().__init__(message=f"Vehículo no encontrado: {vehicle_id}")
        self.vehicle_id = vehicle_id


class ReservationNotFoundError(NotFoundError):
    """La reservación no existe."""

    def __init__(self, reservation_id: str):
        super().__init__(message=f"Reservación no encontrada: {reservation_id}")
        self.reservation_id = reservation_id


class VehicleUnavailableError(DomainError):
    """El vehículo está deshabilitado administrativamente."""

    def __init__(self, vehicle_id: str):
        super().__init__(
            message=f"Vehículo no disponible: {vehicle_id}",
            code="VEHICLE_UNAVAILABLE",
        )
        self.vehicle_id = vehicle_id


# === Errores de Reservación ===


class ReservationConflictError(DomainError):
    """El vehículo ya está reservado en un rango que se superpone."""

    def __init__(self, vehicle_id: str, conflicts: list[dict] | None = None):
        super().__init__(
            message=f"Vehículo {vehicle_id} ya reservado para este periodo",
            code="CONFLICT",
        )
        self.vehicle_id = vehicle_id
        self.conflicts = conflicts or []

    @property
    def details(self) -> dict:
        return {
            "vehicle_id": self.vehicle_id,
            "conflicting_reservations": self.conflicts,
        }


class InvalidReservationStatusError(DomainError):
    """El estado de la reservación no permite la operación."""

    def __init__(self, current_status: str, expected_status: str | list[str], operation: str):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"No se puede {operation}: estado actual '{current_status}', esperado '{expected}'",
            code="INVALID_STATE",
        )
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation

    @property
    def details(self) -> dict:
        return {"current_status": self.current_status, "operation": self.operation}


# === Errores de Idempotencia ===


class IdempotencyConflictError(DomainError):
    """Conflicto de idempotencia: mismo key pero diferente request."""

    def __init__(self, idem_key: str, scope: str):
        super().__init__(
            message=f"Conflicto de idempotencia: key '{idem_key}' en scope '{scope}' "
            f"ya existe con diferente request hash",
            code="IDEMPOTENCY_CONFLICT",
        )
        self.idem_key = idem_key
        self.scope = scope
