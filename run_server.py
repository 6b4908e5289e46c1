import uvicorn

from tiksearch.config import settings
from tiksearch.logging_config import setup_logging


if __name__ == "__main__":
    setup_logging(settings.log_level, log_file=settings.log_file or None)
    uvicorn.run("tiksearch.main:app", host="0.0.0.0", port=8000, log_config=None)
