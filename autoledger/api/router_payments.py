"""
Payment endpoints — statistics, late payers, status buckets, period totals.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from autoledger.api.dependencies import get_store, parse_date, parse_now, parse_period
from autoledger.api.response_models import (
    CustomersResponse,
    PaymentStatisticsResponse,
    PaymentStatusResponse,
    PeriodTotalResponse,
    customer_list,
)
from autoledger.data.schemas import PeriodFilter
from autoledger.data.store import CustomerStore
from autoledger.display.formatters import format_currency

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("/statistics", response_model=PaymentStatisticsResponse)
def payment_statistics(store: CustomerStore = Depends(get_store)):
    """Sum/mean/max/min over positive payments (all zero when there are none)."""
    return PaymentStatisticsResponse(**store.get_payment_statistics().as_dict())


@router.get("/late", response_model=CustomersResponse)
def late_payers(store: CustomerStore = Depends(get_store), now=Depends(parse_now)):
    late = store.get_late_payers(now)
    return CustomersResponse(customers=customer_list(late), count=len(late))


@router.get("/status", response_model=PaymentStatusResponse)
def payment_status(store: CustomerStore = Depends(get_store), now=Depends(parse_now)):
    status = store.get_customers_by_payment_status(now)
    return PaymentStatusResponse(
        current=customer_list(status.current),
        late=customer_list(status.late),
        no_payments=customer_list(status.no_payments),
        counts=status.counts(),
    )


@router.get("/total", response_model=PeriodTotalResponse)
def total_in_period(
    start: Optional[str] = Query(None, description="Inclusive start (ISO-8601)"),
    end: Optional[str] = Query(None, description="Inclusive end (ISO-8601)"),
    period: PeriodFilter | None = Depends(parse_period),
    store: CustomerStore = Depends(get_store),
):
    """Payments whose last-payment date falls in the range, both ends included."""
    if start and end:
        total = store.get_total_payments_in_period(parse_date(start, "start"), parse_date(end, "end"))
        label = f"{start} to {end}"
    elif period is not None:
        total = store.get_total_payments_for_period(period)
        label = period.label
    else:
        raise HTTPException(400, "Provide start and end, or a period")

    return PeriodTotalResponse(
        start=start,
        end=end,
        label=label,
        total=float(total),
        formatted=format_currency(total),
    )
