#!/usr/bin/env python3
"""
AutoLedger CLI — customer lookups, payment tracking, reports, and the API server.

USAGE:
  python -m autoledger.cli show 42                          # Customer card
  python -m autoledger.cli show 42 --payments               # Card with last payment amount
  python -m autoledger.cli find --make toyota --city "new york"
  python -m autoledger.cli filter make=toy purchased=2019-01-01
  python -m autoledger.cli sort lastpayment --desc

  python -m autoledger.cli stats                            # Counts, distributions, averages
  python -m autoledger.cli payments                         # Payment statistics
  python -m autoledger.cli payments --start 2019-12-01 --end 2020-01-31
  python -m autoledger.cli payments --period quarter --year 2020 --quarter 1
  python -m autoledger.cli status                           # Current / late / no-payment counts

  python -m autoledger.cli report                           # Excel customer report
  python -m autoledger.cli serve --port 8000                # Start API server

Every command accepts --data <file> to read one JSON/CSV file instead of the data folder.
"""
from __future__ import annotations

import argparse
import os
from datetime import datetime
from pathlib import Path

from autoledger.config import DATA_FOLDER, DEFAULT_DATA_FILE, REPORTS_FOLDER
from autoledger.data.errors import EmptyStoreError
from autoledger.data.schemas import Customer, PeriodFilter, PeriodType
from autoledger.data.store import CustomerStore
from autoledger.display.formatters import format_currency, format_name


def _load_store(args) -> CustomerStore:
    """Store from --data, else DEFAULT_DATA_FILE if present, else the whole data folder."""
    if args.data:
        return CustomerStore.load(Path(args.data))
    default = DATA_FOLDER / DEFAULT_DATA_FILE
    if default.exists():
        return CustomerStore.load(default)
    return CustomerStore.load()


def _build_period(args) -> PeriodFilter | None:
    """Build a PeriodFilter from CLI args."""
    pt = getattr(args, "period", None)
    if pt is None:
        return None
    return PeriodFilter(
        period_type=PeriodType(pt),
        year=getattr(args, "year", None),
        month=getattr(args, "month", None),
        quarter=getattr(args, "quarter", None),
    )


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  AUTOLEDGER — {title}")
    print("=" * 70)


def _print_customers(customers: list[Customer]) -> None:
    print(f"\nCUSTOMERS ({len(customers)}):\n")
    for c in customers:
        amount = format_currency(c.payment_amount) if c.payment_amount else "-"
        name = format_name(c.first_name, c.last_name)
        print(f"{c.id:<6}{name[:28]:<30}{c.make[:14]:<16}{c.model[:14]:<16}{c.city[:18]:<20}{amount:>12}")


def cmd_show(args):
    """Print one customer's display card."""
    store = _load_store(args)
    customer = store.get_customer(args.id)
    if customer is None:
        print(f"  Customer not found: {args.id}")
        return
    print()
    if args.payments:
        print(store.format_customer_with_payments(customer))
    else:
        print(store.format_customer(customer))
    print()


def cmd_find(args):
    """Exact (case-insensitive) make/model/city lookups, combined with AND."""
    store = _load_store(args)
    if not (args.make or args.model or args.city):
        print("  Specify --make, --model and/or --city")
        return

    results = store.get_all_customers()
    for value, finder in ((args.make, store.find_by_make), (args.model, store.find_by_model), (args.city, store.find_by_city)):
        if value:
            keep = {id(c) for c in finder(value)}
            results = [c for c in results if id(c) in keep]
    _print_customers(results)


def cmd_filter(args):
    """Substring / lower-bound filter from key=value pairs."""
    criteria = {}
    for pair in args.criteria:
        key, sep, value = pair.partition("=")
        if not sep:
            print(f"  Ignoring '{pair}' (expected key=value)")
            continue
        criteria[key.strip()] = value.strip()

    store = _load_store(args)
    try:
        results = store.filter_by(criteria)
    except ValueError as exc:
        print(f"  Invalid criteria: {exc}")
        return
    _print_customers(results)


def cmd_sort(args):
    store = _load_store(args)
    try:
        results = store.sort_by(args.field, ascending=not args.desc)
    except ValueError as exc:
        print(f"  {exc}")
        return
    _print_customers(results)


def cmd_stats(args):
    """Print store-wide statistics."""
    _banner("STATISTICS")
    store = _load_store(args)
    try:
        stats = store.get_statistics()
    except EmptyStoreError as exc:
        print(f"  {exc}")
        return

    print(f"\n  Customers:            {stats.total_customers:,}")
    print(f"  Unique makes:         {stats.unique_makes:,}")
    print(f"  Unique models:        {stats.unique_models:,}")
    print(f"  Unique cities:        {stats.unique_cities:,}")
    print(f"  Avg days since purchase:     {stats.average_days_since_purchase:,}")
    print(f"  Avg days since last payment: {stats.average_days_since_last_payment:,}")
    print(f"  Avg payment amount:   {format_currency(stats.average_payment_amount)}")

    for title, dist in (("MAKES", stats.make_distribution), ("CITIES", stats.city_distribution)):
        print(f"\n  {title}:")
        ranked = sorted(dist.items(), key=lambda kv: kv[1], reverse=True)
        for i, (key, count) in enumerate(ranked, 1):
            print(f"    {key[:40]:<42}{count:>6,}")
            if i >= args.top:
                break
    print()


def cmd_payments(args):
    """Payment statistics, or the total paid in a period."""
    _banner("PAYMENTS")
    store = _load_store(args)
    period = _build_period(args)

    if args.start and args.end:
        total = store.get_total_payments_in_period(args.start, args.end)
        print(f"\n  Total payments {args.start} to {args.end}: {format_currency(total)}\n")
        return
    if period is not None:
        total = store.get_total_payments_for_period(period)
        print(f"\n  Total payments ({period.label}): {format_currency(total)}\n")
        return

    stats = store.get_payment_statistics()
    print(f"\n  Total Payments:   {format_currency(stats.total_payments)}")
    print(f"  Average Payment:  {format_currency(stats.average_payment)}")
    print(f"  Highest Payment:  {format_currency(stats.highest_payment)}")
    print(f"  Lowest Payment:   {format_currency(stats.lowest_payment)}\n")


def cmd_status(args):
    """Payment-status bucket counts, optionally listing late payers."""
    _banner("PAYMENT STATUS")
    store = _load_store(args)
    status = store.get_customers_by_payment_status()
    print(f"\n  Current payers: {len(status.current):,}")
    print(f"  Late payers:    {len(status.late):,}")
    print(f"  No payments:    {len(status.no_payments):,}")
    if args.list_late:
        _print_customers(status.late)
    print()


def cmd_report(args):
    """Write the Excel customer report."""
    _banner("CUSTOMER REPORT")
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")
    store = _load_store(args)

    from autoledger.reports.customer_report import generate_excel

    if args.output:
        out = Path(args.output)
    else:
        out = REPORTS_FOLDER / f"Customer_Ledger_{datetime.now():%Y%m%d_%H%M%S}.xlsx"
    try:
        path = generate_excel(store, out)
    except EmptyStoreError as exc:
        print(f"  Skipped report — {exc}")
        return
    print(f"\n  Report saved to: {path}")
    print("=" * 70 + "\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting AutoLedger API on port {args.port}...")
    uvicorn.run("autoledger.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--data", help="Read one JSON/CSV record file instead of the data folder")

    parser = argparse.ArgumentParser(
        description="AutoLedger — customer & vehicle record queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    show_parser = subparsers.add_parser("show", parents=[common], help="Show a customer card")
    show_parser.add_argument("id", type=int, help="Customer id")
    show_parser.add_argument("--payments", action="store_true", help="Include last payment amount")
    show_parser.set_defaults(func=cmd_show)

    find_parser = subparsers.add_parser("find", parents=[common], help="Find by make/model/city")
    find_parser.add_argument("--make", help="Vehicle make")
    find_parser.add_argument("--model", help="Vehicle model")
    find_parser.add_argument("--city", help="City")
    find_parser.set_defaults(func=cmd_find)

    filter_parser = subparsers.add_parser("filter", parents=[common], help="Filter by key=value criteria")
    filter_parser.add_argument("criteria", nargs="+", help="field=value pairs")
    filter_parser.set_defaults(func=cmd_filter)

    sort_parser = subparsers.add_parser("sort", parents=[common], help="List customers sorted by a field")
    sort_parser.add_argument("field", help="Field to sort by")
    sort_parser.add_argument("--desc", action="store_true", help="Descending order")
    sort_parser.set_defaults(func=cmd_sort)

    stats_parser = subparsers.add_parser("stats", parents=[common], help="Store statistics")
    stats_parser.add_argument("--top", type=int, default=10, help="Rows per distribution (default 10)")
    stats_parser.set_defaults(func=cmd_stats)

    pay_parser = subparsers.add_parser("payments", parents=[common], help="Payment statistics / period totals")
    pay_parser.add_argument("--start", help="Inclusive start date (ISO-8601)")
    pay_parser.add_argument("--end", help="Inclusive end date (ISO-8601)")
    pay_parser.add_argument("--period", choices=["month", "quarter", "year"], help="Period type")
    pay_parser.add_argument("--year", type=int, help="Year")
    pay_parser.add_argument("--month", type=int, help="Month (1-12)")
    pay_parser.add_argument("--quarter", type=int, help="Quarter (1-4)")
    pay_parser.set_defaults(func=cmd_payments)

    status_parser = subparsers.add_parser("status", parents=[common], help="Payment status summary")
    status_parser.add_argument("--list-late", action="store_true", help="List late payers")
    status_parser.set_defaults(func=cmd_status)

    report_parser = subparsers.add_parser("report", parents=[common], help="Generate Excel report")
    report_parser.add_argument("--output", help="Output .xlsx path")
    report_parser.set_defaults(func=cmd_report)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
