#!/usr/bin/env python
"""Script to run the todo backend server."""
import uvicorn

from todo_app.config import HOST, LOG_FILE, LOG_LEVEL, PORT
from todo_app.logging_setup import setup_logging


def main() -> None:
    setup_logging(console_level=LOG_LEVEL, log_file=LOG_FILE)
    uvicorn.run(
        "todo_app.main:app",
        host=HOST,
        port=PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
