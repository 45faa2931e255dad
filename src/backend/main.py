import logging

import uvicorn

from config import HOST, LOG_LEVEL, PORT


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
    )
    uvicorn.run("server:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
