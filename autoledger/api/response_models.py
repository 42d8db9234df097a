"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from autoledger.data.schemas import Customer


class CustomerOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    purchased: str
    lastpayment: str
    phone: str
    make: str
    model: str
    city: str
    payment_amount: Optional[float] = None

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerOut":
        return cls(**customer.to_record())


def customer_list(customers: list[Customer]) -> list[CustomerOut]:
    return [CustomerOut.from_customer(c) for c in customers]


class HealthResponse(BaseModel):
    status: str
    customers: int


class CustomersResponse(BaseModel):
    customers: list[CustomerOut]
    count: int


class CardResponse(BaseModel):
    id: int
    text: str


class StatisticsResponse(BaseModel):
    total_customers: int
    unique_makes: int
    unique_models: int
    unique_cities: int
    make_distribution: dict[str, int]
    city_distribution: dict[str, int]
    average_days_since_purchase: int
    average_days_since_last_payment: int
    average_payment_amount: float


class PaymentStatisticsResponse(BaseModel):
    total_payments: float
    average_payment: float
    highest_payment: float
    lowest_payment: float


class PaymentStatusResponse(BaseModel):
    current: list[CustomerOut]
    late: list[CustomerOut]
    no_payments: list[CustomerOut]
    counts: dict[str, int]


class PeriodTotalResponse(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None
    label: str
    total: float
    formatted: str
