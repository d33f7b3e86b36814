import copy
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

CARD_NUMBER = "7844481124110331"

PATIENT = {
    "name": "John Doe",
    "dob": "1940-03-19",
    "ssn": "234-23-525",
    "address": "California",
    "phone": "8770586755",
    "email": "johndoe@gmail.com",
}

DOCTOR = {
    "name": "thomas collins",
    "hospital": "grand oak community hospital",
    "category": "surgery",
    "availability": "9.00 a.m - 11.00 a.m",
    "fee": 7000.0,
}

RESERVATION_REQUEST = {
    "patient": {**PATIENT, "cardNo": CARD_NUMBER},
    "doctor": "thomas collins",
    "hospital_id": "grandoaks",
    "hospital": "grand oak community hospital",
    "appointment_date": "2023-10-02",
}

APPOINTMENT = {
    "appointmentNumber": 1,
    "doctor": DOCTOR,
    "patient": PATIENT,
    "fee": 7000.0,
    "confirmed": False,
    "hospital": "grand oak community hospital",
    "appointmentDate": "2023-10-02",
}

FEE = {
    "patientName": "John Doe",
    "doctorName": "thomas collins",
    "actualFee": "7000",
}

RESERVATION_STATUS = {
    "appointmentNo": 1,
    "doctorName": "thomas collins",
    "patient": "John Doe",
    "actualFee": 7000.0,
    "discount": 20,
    "discounted": 5600.0,
    "paymentID": "480fead2-e592-4b84-8dd0-2f9fd24e9e21",
    "status": "settled",
}


@pytest.fixture
def reservation_request() -> dict:
    return copy.deepcopy(RESERVATION_REQUEST)


@pytest.fixture
def routed_request() -> dict:
    request = copy.deepcopy(RESERVATION_REQUEST)
    request["patient"].pop("cardNo")
    return request


@pytest.fixture
def appointment() -> dict:
    return copy.deepcopy(APPOINTMENT)


@pytest.fixture
def fee() -> dict:
    return copy.deepcopy(FEE)


@pytest.fixture
def reservation_status() -> dict:
    return copy.deepcopy(RESERVATION_STATUS)
