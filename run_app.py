import uvicorn

from ip_intel.config import get_settings
from ip_intel.logger import build_log_config


def main() -> None:
    """Run the FastAPI application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "ip_intel.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=build_log_config(settings.log_level),
    )


if __name__ == "__main__":
    main()
