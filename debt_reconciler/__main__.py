"""Fetch all collections, reconcile them and print the enriched debts as JSON"""

import asyncio
import logging
import sys

from debt_reconciler.api.v1.schemas import render_report
from debt_reconciler.config import settings
from debt_reconciler.domain.exceptions import DomainException
from debt_reconciler.infrastructure.observability.logging import setup_logging
from debt_reconciler.infrastructure.snapshot import run_reconciliation


def main() -> int:
    setup_logging(settings.log_level)

    try:
        result = asyncio.run(run_reconciliation())
    except DomainException as e:
        # Fatal: no partial output
        logging.error(f"Error populating debts: {e}")
        return 1

    print(render_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
