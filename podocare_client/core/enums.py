"""Core enums used across modules."""

from enum import StrEnum


class EnvelopeStateEnum(StrEnum):
    """Backend response discriminator."""

    SUCCESS = "success"
    ERROR = "error"


class PaymentMethodEnum(StrEnum):
    """Accepted payment methods."""

    CASH = "cash"
    TRANSFER = "transfer"
    YAPE = "yape"
    POS = "pos"
    PLIN = "plin"
    BALANCE = "balance"


class BalanceMovementTypeEnum(StrEnum):
    """Direction of a patient balance movement."""

    CREDIT = "credit"
    DEBIT = "debit"


class AppointmentStatusEnum(StrEnum):
    """Appointment lifecycle status."""

    REGISTERED = "registered"
    SCHEDULED = "scheduled"
    PAID = "paid"
    COMPLETED = "completed"
    CANCELED = "canceled"


class ProductStatusEnum(StrEnum):
    """Product catalog status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class MovementTypeEnum(StrEnum):
    """Kardex movement direction."""

    ENTRADA = "entrada"
    SALIDA = "salida"


class SaleStateEnum(StrEnum):
    """Sale state."""

    ACTIVA = "activa"
    ANULADA = "anulada"


class PackageStatusEnum(StrEnum):
    """Session package catalog status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
