"""
Mission Control entry point

Usage:
    python -m mission_control
    or
    uvicorn mission_control.main:app --host 0.0.0.0 --port 3000

uvicorn exits with status 1 when the listen socket cannot be bound.
"""

import uvicorn

from mission_control.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "mission_control.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
