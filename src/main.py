import logging
import os
import sys
from typing import List, Optional

from errors import ConfigurationError, PaymentsError
from payments_engine import PaymentsEngine
from report import write_summaries

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "PAYMENTS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigurationError(f"{LOG_LEVEL_ENV} must be a logging level name, got '{level_name}'")

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: List[str]) -> str:
    if len(argv) != 1:
        raise ConfigurationError(f"Expected exactly one input file, got {len(argv)} arguments")
    return argv[0]


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    try:
        filepath = parse_args(args)
        configure_logging()
    except ConfigurationError as e:
        print(f"{e}\nUsage: python main.py <input.csv>", file=sys.stderr)
        return 1

    engine = PaymentsEngine()
    try:
        summaries = engine.process_file(filepath)
    except (PaymentsError, OSError) as e:
        logger.error(f"Aborting, no output written: {e}")
        return 1

    print(f"Applied: {engine.stats.applied}, Rejected: {engine.stats.rejected}", file=sys.stderr)
    write_summaries(summaries, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
