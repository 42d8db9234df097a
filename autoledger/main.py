"""
AutoLedger — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from autoledger.api.dependencies import set_store
from autoledger.api.router_customers import router as customers_router
from autoledger.api.router_meta import router as meta_router
from autoledger.api.router_payments import router as payments_router
from autoledger.config import DATA_FOLDER
from autoledger.data.store import CustomerStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load all customer records at startup."""
    DATA_FOLDER.mkdir(parents=True, exist_ok=True)

    print(f"  AUTOLEDGER_DATA_DIR = {os.environ.get('AUTOLEDGER_DATA_DIR', '(not set)')}")
    print(f"  DATA_FOLDER = {DATA_FOLDER}")

    store = CustomerStore.load(folder=DATA_FOLDER)
    set_store(store)

    if len(store) > 0:
        print(f"\nAutoLedger ready — {len(store):,} customers\n")
    else:
        print("\nAutoLedger ready — no customer records yet.\n")
    yield


def create_app(load_on_startup: bool = True) -> FastAPI:
    app = FastAPI(
        title="AutoLedger API",
        description="Customer & vehicle records — lookups, payment tracking, statistics",
        version="1.0.0",
        lifespan=lifespan if load_on_startup else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(customers_router)
    app.include_router(payments_router)
    return app


app = create_app()
