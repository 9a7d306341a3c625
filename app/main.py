import uvicorn

from app.api.app import create_app
from app.config.settings import Settings


def main() -> None:
    """Entry point: load settings -> build the app -> serve it."""
    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host=settings.http_host,
        port=settings.http_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
