from os import environ

from uvicorn import run

from cartehandicap.log import configure_logging


def main() -> None:
    configure_logging()
    run(
        "cartehandicap.app:app",
        host=environ.get("HOST", "0.0.0.0"),
        port=int(environ.get("PORT", 3000)),
        workers=int(environ.get("WORKERS", 1)),
    )


if __name__ == "__main__":
    main()
