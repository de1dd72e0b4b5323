"""Run the API with uvicorn: python -m guest_services."""

import uvicorn

from guest_services.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "guest_services.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
