"""Patients schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from podocare_client.core.enums import BalanceMovementTypeEnum, PaymentMethodEnum
from podocare_client.modules.abonos.schemas import Abono, AbonoUsage
from podocare_client.modules.appointments.schemas import Appointment
from podocare_client.modules.packages.schemas import PatientPackage
from podocare_client.modules.sales.schemas import Sale
from podocare_client.shared.schemas import ApiSchema

DocumentType = Literal["dni", "passport"]
Gender = Literal["m", "f"]


class PatientCreate(ApiSchema):
    """Register patient request."""

    document_type: DocumentType = "dni"
    document_number: str = Field(min_length=1, max_length=32)
    first_name: str = Field(min_length=1, max_length=128)
    paternal_surname: str = Field(min_length=1, max_length=128)
    maternal_surname: str = Field(default="", max_length=128)
    gender: Gender
    birth_date: str
    email: str | None = None
    phone: str | None = None
    allergy: str | None = None
    diabetic: bool = False
    hypertensive: bool = False
    other_conditions: str | None = None


class PatientUpdate(ApiSchema):
    """Partial patient update."""

    document_type: DocumentType | None = None
    document_number: str | None = Field(default=None, min_length=1, max_length=32)
    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    paternal_surname: str | None = Field(default=None, min_length=1, max_length=128)
    maternal_surname: str | None = Field(default=None, max_length=128)
    gender: Gender | None = None
    birth_date: str | None = None
    email: str | None = None
    phone: str | None = None
    allergy: str | None = None
    diabetic: bool | None = None
    hypertensive: bool | None = None
    other_conditions: str | None = None


class PatientBalanceUpdate(ApiSchema):
    """Credit or debit a patient's prepaid balance."""

    amount: float = Field(gt=0)
    type: BalanceMovementTypeEnum = BalanceMovementTypeEnum.CREDIT
    description: str | None = None
    payment_method: PaymentMethodEnum
    user_id: str


class Patient(ApiSchema):
    """Patient record."""

    id: str
    document_type: str | None = None
    document_number: str | None = None
    first_name: str
    paternal_surname: str | None = None
    maternal_surname: str | None = None
    gender: str | None = None
    email: str | None = None
    phone: str | None = None
    birth_date: str | None = None
    allergy: str | None = None
    diabetic: bool = False
    hypertensive: bool = False
    other_conditions: str | None = None
    first_name_normalized: str | None = None
    last_name_normalized: str | None = None
    balance: float = 0

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.paternal_surname, self.maternal_surname]
        return " ".join(part for part in parts if part)


class PatientDetailStatistics(ApiSchema):
    """Patient record with its clinical and commercial history."""

    patient: Patient
    appointments: list[Appointment] = Field(default_factory=list)
    sales: list[Sale] = Field(default_factory=list)
    abonos: list[Abono] = Field(default_factory=list)
    abono_usage: list[AbonoUsage] = Field(default_factory=list)
    patient_packages: list[PatientPackage] = Field(default_factory=list)
