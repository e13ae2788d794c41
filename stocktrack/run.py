import uvicorn

from stocktrack.core.config import get_settings


def main():
    settings = get_settings()

    config = uvicorn.Config(
        "stocktrack.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
    server = uvicorn.Server(config)

    try:
        server.run()
    except KeyboardInterrupt:
        print("\nShutting down server...")


if __name__ == "__main__":
    main()
