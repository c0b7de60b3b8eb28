"""Run the service with uvicorn: `python -m flashcard`."""

from __future__ import annotations

import uvicorn

from flashcard.config import load_config


def main() -> None:
    config = load_config()
    uvicorn.run(
        "flashcard.main:create_app",
        factory=True,
        host=config.web.host,
        port=config.web.port,
        log_level=config.web.log_level.lower(),
    )


if __name__ == "__main__":
    main()
