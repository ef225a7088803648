from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from . import config, data, loader
from .errors import ReplenishmentError
from .logging_setup import configure_logging
from .service import ReplenishmentService


def _write_report(name: str, payload) -> Path:
    out_dir = Path(config.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / name
    out_file.write_text(json.dumps(payload, indent=2))
    return out_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inventory replenishment engine")
    parser.add_argument("--data-dir", default=config.DATA_DIR or None, help="Directory of JSON seed files")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("suggestions", help="List products that need reordering")
    sub.add_parser("status", help="Report effective status of every purchase order")

    order = sub.add_parser("order", help="Place a purchase order")
    order.add_argument("product_id")
    order.add_argument("quantity", type=int)
    order.add_argument("--goal", default=None, choices=["cost", "speed", "reliability", "balance"])

    remind = sub.add_parser("remind", help="Record a supplier reminder")
    remind.add_argument("po_id")
    remind.add_argument("supplier_id")
    remind.add_argument("--message", default=None)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        store = loader.load_store(args.data_dir) if args.data_dir else data.sample_store()
        service = ReplenishmentService(store)
        if args.command == "suggestions":
            payload = [asdict(s) for s in service.get_reorder_suggestions()]
            out_file = _write_report("reorder_suggestions.json", payload)
        elif args.command == "status":
            payload = [r.to_dict() for r in service.get_po_status_report()]
            out_file = _write_report("po_status.json", payload)
        elif args.command == "order":
            placed = service.place_order(args.product_id, args.quantity, args.goal)
            payload = asdict(placed.purchase_order)
            payload["message"] = placed.message
            payload["chosen_supplier_reason"] = placed.chosen_supplier_reason
            out_file = None
        else:
            reminder = service.send_supplier_reminder(args.po_id, args.supplier_id, args.message)
            payload = asdict(reminder)
            out_file = None
    except ReplenishmentError as exc:
        print(f"error={exc.message}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"error={exc}", file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=2))
    if out_file:
        print(f"report written to {out_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
