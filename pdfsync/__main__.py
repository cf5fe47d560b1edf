import logging
import sys

import uvicorn
from dotenv import load_dotenv

from .config import Config
from .main import create_app


def setup_logging(level: str = "info") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main() -> None:
    load_dotenv()
    try:
        config = Config.load()
    except (OSError, ValueError) as exc:
        setup_logging()
        logging.error("Failed to load configuration: %s", exc)
        sys.exit(1)
    setup_logging(config.log_level)

    uvicorn.run(create_app(config), host=config.host, port=config.port, reload=False, log_level=config.log_level)


if __name__ == "__main__":
    main()
