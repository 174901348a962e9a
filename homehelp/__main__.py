import uvicorn

from homehelp.core.config import settings


def main() -> None:
    uvicorn.run(
        "homehelp.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.ENVIRONMENT == "dev",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
