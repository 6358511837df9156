import uvicorn

from flowrelay.config import get_settings
from flowrelay.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(),
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
