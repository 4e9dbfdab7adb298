#!/usr/bin/env python3
"""
FOSSA Bulk Import - Import every repository of a GitHub organization
into FOSSA.

This tool lists the repositories of a GitHub organization, skips the ones
FOSSA already tracks, and submits the rest in batches through the same
Quick Import API that the FOSSA web interface uses.
"""

from __future__ import annotations

import sys
from typing import List, NoReturn, Optional

from argument_parser import parse_arguments
from import_orchestrator import ImportOrchestrator


def main(argv: Optional[List[str]] = None) -> NoReturn:
    cfg = parse_arguments(argv)
    orchestrator = ImportOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
