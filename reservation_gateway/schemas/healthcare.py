from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Fees are parsed from and written to JSON by reservation_gateway.encoding, never
# through binary floating point.
Money = Decimal


class HealthcareModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Patient(HealthcareModel):
    name: str
    dob: str
    ssn: str
    address: str
    phone: str
    email: str


class PaymentPatient(Patient):
    """Patient details as submitted by the caller, including the payment card."""

    card_no: str = Field(alias="cardNo")

    def without_card(self) -> Patient:
        return Patient(**self.model_dump(exclude={"card_no"}))


class ReservationRequest(HealthcareModel):
    patient: PaymentPatient
    doctor: str
    hospital_id: str
    hospital: str
    appointment_date: str


class RoutedReservationRequest(HealthcareModel):
    patient: Patient
    doctor: str
    hospital_id: str
    hospital: str
    appointment_date: str


class HospitalReservation(HealthcareModel):
    """Body sent to a hospital service to reserve an appointment."""

    patient: Patient
    doctor: str
    hospital: str
    appointment_date: str


class Doctor(HealthcareModel):
    name: str
    hospital: str
    category: str
    availability: str
    fee: Money


class Appointment(HealthcareModel):
    appointment_number: int = Field(alias="appointmentNumber")
    doctor: Doctor
    patient: Patient
    fee: Money
    confirmed: bool = False
    hospital: str
    appointment_date: str = Field(alias="appointmentDate")


# The routing variant answers with the hospital's appointment unchanged.
ReservationResponse = Appointment


class Fee(HealthcareModel):
    patient_name: str = Field(alias="patientName")
    doctor_name: str = Field(alias="doctorName")
    actual_fee: str = Field(alias="actualFee")


class PaymentRequest(HealthcareModel):
    appointment_number: int = Field(alias="appointmentNumber")
    doctor: Doctor
    patient: Patient
    fee: Money
    confirmed: bool = False
    card_number: str


class ReservationStatus(HealthcareModel):
    appointment_no: int = Field(alias="appointmentNo")
    doctor_name: str = Field(alias="doctorName")
    patient: str
    actual_fee: Money = Field(alias="actualFee")
    discount: Money
    discounted: Money
    payment_id: str = Field(alias="paymentID")
    status: str
