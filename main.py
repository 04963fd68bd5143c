import uvicorn

from agents.config import config


def main():
    uvicorn.run(
        "backend.api:app",
        host="0.0.0.0",
        port=config.get_int("PORT", 3001),
        reload=config.is_development,
    )


if __name__ == "__main__":
    main()
