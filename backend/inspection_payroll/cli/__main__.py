# backend/inspection_payroll/cli/__main__.py
from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import date

from inspection_payroll.cli.seed_demo import seed_demo
from inspection_payroll.db import SessionLocal, init_db
from inspection_payroll.domain.clock import system_clock
from inspection_payroll.domain.errors import DomainError
from inspection_payroll.services.report_service import build_report, build_two_weeks_report, report_to_out


def _print(obj) -> None:
    print(json.dumps(obj, indent=2, default=str))


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="inspection_payroll")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="create tables on the configured database")

    seed = sub.add_parser("seed-demo", help="insert demo properties, tasks and sundry entries")
    seed.add_argument("--no-complete", action="store_true", help="leave every demo task open")

    rep = sub.add_parser("report", help="payroll report for an inclusive date range")
    rep.add_argument("--start", required=True, type=date.fromisoformat)
    rep.add_argument("--end", required=True, type=date.fromisoformat)

    sub.add_parser("two-weeks", help="payroll report for the last 14 days")

    args = p.parse_args(argv)

    if args.command == "init-db":
        init_db()
        _print({"ok": True})
        return

    init_db()
    db = SessionLocal()
    try:
        if args.command == "seed-demo":
            out = seed_demo(db, clock=system_clock, complete_first=not args.no_complete)
            _print({"ok": True, **asdict(out)})
        elif args.command == "report":
            _print(report_to_out(build_report(db, start_date=args.start, end_date=args.end)))
        elif args.command == "two-weeks":
            _print(report_to_out(build_two_weeks_report(db, clock=system_clock)))
    except DomainError as e:
        _print({"ok": False, "message": e.message})
        raise SystemExit(1) from e
    finally:
        db.close()


if __name__ == "__main__":
    main()
