# src/idea_catalog/scripts/reconcile_counters.py
"""
Cron job to repair drifted idea counters.

Counter updates that follow a committed write are best-effort, so
``comment_count`` and ``project_count`` can drift from the rows they
summarise. This script should be run periodically to recompute them.
"""

from __future__ import annotations

import argparse
import uuid

from idea_catalog.core.logging import configure_logging
from idea_catalog.db.session import SessionLocal
from idea_catalog.services.counters import reconcile_counters


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Recompute denormalized idea counters.")
    parser.add_argument(
        "--idea-id",
        type=uuid.UUID,
        default=None,
        help="Only reconcile this idea (defaults to every idea)",
    )
    args = parser.parse_args(argv)

    configure_logging()
    db = SessionLocal()
    try:
        repaired = reconcile_counters(db, args.idea_id)
    finally:
        db.close()

    print(f"Reconciled counters on {repaired} idea(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
