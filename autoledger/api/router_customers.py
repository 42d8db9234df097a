"""
Customer endpoints: listing, lookups, filters, sorting, display cards.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from autoledger.api.dependencies import get_store, parse_date, parse_now
from autoledger.api.response_models import CardResponse, CustomerOut, CustomersResponse, customer_list
from autoledger.data.store import CustomerStore

router = APIRouter(prefix="/api/customers", tags=["customers"])


def _response(customers) -> CustomersResponse:
    return CustomersResponse(customers=customer_list(customers), count=len(customers))


@router.get("", response_model=CustomersResponse)
def list_customers(
    make: Optional[str] = Query(None, description="Exact make, any case"),
    model: Optional[str] = Query(None, description="Exact model, any case"),
    city: Optional[str] = Query(None, description="Exact city, any case"),
    sort: Optional[str] = Query(None, description="Field to sort by"),
    desc: bool = Query(False),
    store: CustomerStore = Depends(get_store),
):
    """All customers, optionally narrowed by make/model/city and sorted."""
    if sort:
        try:
            results = store.sort_by(sort, ascending=not desc)
        except ValueError as exc:
            raise HTTPException(400, str(exc))
    else:
        results = store.get_all_customers()

    for value, finder in ((make, store.find_by_make), (model, store.find_by_model), (city, store.find_by_city)):
        if value:
            keep = {id(c) for c in finder(value)}
            results = [c for c in results if id(c) in keep]

    return _response(results)


@router.post("/filter", response_model=CustomersResponse)
def filter_customers(
    criteria: dict[str, Any] = Body(..., examples=[{"make": "toy", "purchased": "2019-01-01"}]),
    store: CustomerStore = Depends(get_store),
):
    """AND of all criteria: dates are lower bounds, text is substring match."""
    try:
        return _response(store.filter_by(criteria))
    except ValueError as exc:
        raise HTTPException(400, str(exc))


@router.get("/purchased-after", response_model=CustomersResponse)
def purchased_after(date: str = Query(...), store: CustomerStore = Depends(get_store)):
    return _response(store.get_customers_after_date(parse_date(date, "date")))


@router.get("/last-payment-before", response_model=CustomersResponse)
def last_payment_before(date: str = Query(...), store: CustomerStore = Depends(get_store)):
    return _response(store.get_customers_with_last_payment_before(parse_date(date, "date")))


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int, store: CustomerStore = Depends(get_store)):
    customer = store.get_customer(customer_id)
    if customer is None:
        raise HTTPException(404, f"Customer {customer_id} not found")
    return CustomerOut.from_customer(customer)


@router.get("/{customer_id}/card", response_model=CardResponse)
def customer_card(
    customer_id: int,
    payments: bool = Query(False, description="Append the last payment amount"),
    store: CustomerStore = Depends(get_store),
    now=Depends(parse_now),
):
    """Formatted multi-line display card for one customer."""
    customer = store.get_customer(customer_id)
    if customer is None:
        raise HTTPException(404, f"Customer {customer_id} not found")
    fmt = store.format_customer_with_payments if payments else store.format_customer
    return CardResponse(id=customer_id, text=fmt(customer, now))
