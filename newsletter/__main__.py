"""Run the API with uvicorn: `python -m newsletter`."""

import uvicorn

from newsletter.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "newsletter.main:app",
        host=settings.application_host,
        port=settings.application_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
