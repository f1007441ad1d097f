#!/usr/bin/env python3
"""
FIFO liquidation calculator (command line)

Features:
- Reads the first worksheet of an Excel workbook, or a CSV file
- Auto-detects the date, direction, nominal, TRN, CNC and PCK columns;
  any of them can be overridden by header name or position
- Prints the lot summary (and optionally every lot)
- Writers:
  * contributor CSV (.csv)
  * contributor workbook (.xlsx)
"""

from __future__ import annotations

import argparse
import logging
import logging.config
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from fifo_ledger.controllers import (
    LotSummary,
    ReconcileResult,
    filter_lots,
    flatten_contributor_rows,
    load_sheet,
    map_sheet_columns,
    reconcile,
    write_contributor_csv,
    write_contributor_excel,
)
from fifo_ledger.data_model import (
    REQUIRED_ROLES,
    ROLE_LABELS,
    DirectionKeywords,
    EnumLotStatus,
    Lot,
)
from fifo_ledger.exceptions import FifoLedgerError
from fifo_ledger.utilities import LOG_DIR, format_date, logging_config
from fifo_ledger.utilities.config_matching import (
    DEFAULT_BUY_KEYWORD,
    DEFAULT_SELL_KEYWORD,
)

log = logging.getLogger(__name__)


# ------------------------ Formatting ------------------------


def fmt_num(n: Decimal) -> str:
    """Thousands-separated; whole numbers without decimals, others up to 6 places."""
    if n == n.to_integral_value():
        return f"{int(n):,}"
    return f"{n:,.6f}".rstrip("0").rstrip(".")


def format_summary(summary: LotSummary) -> List[str]:
    return [
        f"Total Lots:          {summary.total_lots}",
        f"Open Lots:           {summary.open_lots}",
        f"Closed Lots:         {summary.closed_lots}",
        f"Open Long Position:  {fmt_num(summary.open_long_qty)}",
        f"Open Short Position: {fmt_num(summary.open_short_qty)}",
        f"Net Position:        {fmt_num(summary.net_open_qty)}",
        f"Total Bought:        {fmt_num(summary.total_bought_qty)}",
        f"Total Sold:          {fmt_num(summary.total_sold_qty)}",
    ]


def format_lot(lot: Lot) -> str:
    refs = [
        f"{label}: {value}"
        for label, value in (("TRN", lot.trn), ("CNC", lot.cnc), ("PCK", lot.pck))
        if value
    ]
    parts = [
        f"Lot #{lot.id}",
        f"{lot.side.position_label} LOT",
        str(lot.status).upper(),
        f"{fmt_num(lot.remaining_qty)} / {fmt_num(lot.open_qty)}",
        format_date(lot.date),
    ]
    return "  ".join(parts + refs)


# ------------------------ CLI ------------------------


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="fifo-ledger",
        description="Match buy/sell transactions into FIFO lots and export the contributor ledger.",
    )
    ap.add_argument("input", type=Path, help="Path to input .xlsx/.xls/.csv file")
    ap.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Optional contributor export (.csv or .xlsx)",
    )
    ap.add_argument("--sheet", default="0",
                    help="Worksheet name or 0-based position (default: first sheet)")
    ap.add_argument("--buy-keyword", default=DEFAULT_BUY_KEYWORD,
                    help=f"Direction text marking a buy (default: {DEFAULT_BUY_KEYWORD!r})")
    ap.add_argument("--sell-keyword", default=DEFAULT_SELL_KEYWORD,
                    help=f"Direction text marking a sell (default: {DEFAULT_SELL_KEYWORD!r})")

    for role in REQUIRED_ROLES:
        ap.add_argument(f"--col-{role}", dest=f"col_{role}", metavar="HEADER",
                        help=f"{ROLE_LABELS[role]} column: header name or 0-based position")

    ap.add_argument("--status", choices=["all", "open", "closed"], default="all",
                    help="Only list/export lots with this status")
    ap.add_argument("--show-lots", action="store_true", help="Print one line per lot")
    ap.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    help="Console log level (default: INFO)")
    ap.add_argument("--log-dir", type=Path, default=Path(LOG_DIR),
                    help=f"Folder for the rotating log file (default: {LOG_DIR})")
    return ap


def configure_logging(level: str, log_dir: Path) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(logging_config(level, log_dir))


def _column_overrides(args: argparse.Namespace) -> Dict[str, str]:
    return {
        role: getattr(args, f"col_{role}")
        for role in REQUIRED_ROLES
        if getattr(args, f"col_{role}") is not None
    }


def run(args: argparse.Namespace) -> ReconcileResult:
    sheet_ref = int(args.sheet) if str(args.sheet).isdigit() else args.sheet
    sheet = load_sheet(args.input, sheet=sheet_ref)
    mapping = map_sheet_columns(sheet, _column_overrides(args))
    keywords = DirectionKeywords(args.buy_keyword, args.sell_keyword)
    return reconcile(sheet, mapping, keywords)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_dir)

    if not args.input.exists():
        raise SystemExit(f"Input file not found: {args.input}")
    if not args.input.is_file():
        raise SystemExit(f"Input path is not a file: {args.input}")
    if args.output is not None and args.output.suffix.lower() not in (".csv", ".xlsx"):
        raise SystemExit(f"Unknown output type: {args.output.suffix or '(none)'}")

    try:
        result = run(args)
    except FifoLedgerError as e:
        raise SystemExit(str(e)) from e

    status = None if args.status == "all" else EnumLotStatus.from_text(args.status)
    lots = filter_lots(result.lots, status)

    for line in format_summary(result.summary):
        print(line)
    if result.excluded_count:
        print(f"Rows excluded:       {result.excluded_count}")
    if args.show_lots:
        for lot in lots:
            print(format_lot(lot))

    if args.output is not None:
        rows = flatten_contributor_rows(lots)
        if args.output.suffix.lower() == ".xlsx":
            write_contributor_excel(rows, args.output)
        else:
            write_contributor_csv(rows, args.output)
        log.info("Wrote %d contributor rows to %s", len(rows), args.output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
