"""Docker HEALTHCHECK script for the esindex exporter.

Checks if the check loop recently wrote a timestamp to the healthcheck
file. Missing, unreadable or older than the max age means unhealthy
(exit code 1).
"""

import os
import sys
import time
from pathlib import Path

HEALTHCHECK_FILE = Path(os.getenv("HEALTHCHECK_FILE", "/app/data/healthcheck"))
MAX_AGE_SECONDS = float(os.getenv("HEALTHCHECK_MAX_AGE_SECONDS", "300"))  # 5 minutes


def is_healthy(path: Path, max_age: float, now: float | None = None) -> bool:
    if not path.exists():
        return False
    try:
        last_ts = float(path.read_text().strip())
    except (ValueError, OSError):
        return False
    age = (time.time() if now is None else now) - last_ts
    return age <= max_age


def main() -> None:
    sys.exit(0 if is_healthy(HEALTHCHECK_FILE, MAX_AGE_SECONDS) else 1)


if __name__ == "__main__":
    main()
