"""
Meta endpoints: health, statistics, distributions, reload.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from autoledger.api.dependencies import get_store, parse_now, set_store
from autoledger.api.response_models import HealthResponse, StatisticsResponse
from autoledger.data.errors import EmptyStoreError
from autoledger.data.store import CustomerStore

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: CustomerStore = Depends(get_store)):
    return HealthResponse(status="ok", customers=len(store))


@router.get("/statistics", response_model=StatisticsResponse)
def statistics(
    store: CustomerStore = Depends(get_store),
    now=Depends(parse_now),
):
    """Counts, distributions and day averages over the whole store."""
    try:
        stats = store.get_statistics(now)
    except EmptyStoreError as exc:
        raise HTTPException(409, str(exc))
    return StatisticsResponse(**vars(stats))


@router.get("/distribution/makes")
def make_distribution(store: CustomerStore = Depends(get_store)):
    return store.get_make_distribution()


@router.get("/distribution/cities")
def city_distribution(store: CustomerStore = Depends(get_store)):
    return store.get_city_distribution()


@router.post("/reload")
def reload_data():
    """Re-read the data folder and swap in a fresh store."""
    store = CustomerStore.load()
    set_store(store)
    print(f"  Reload complete — {len(store):,} customers")
    return {"status": "reloaded", "customers": len(store)}
