# main.py

from uvicorn import run

from app.configs import settings


def main() -> None:
    """Serve the blog API with uvloop and httptools, reloading in development."""
    run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
        loop="uvloop",
        http="httptools",
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
