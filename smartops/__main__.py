import argparse

import uvicorn

from smartops.config import HOST, PORT, LOG_LEVEL


def main():
    parser = argparse.ArgumentParser(description="SmartOps Core backend & metrics channel")
    parser.add_argument("--host", default=HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=PORT, help="Listening port")
    args = parser.parse_args()

    # log_config=None keeps uvicorn from replacing our JSON logging
    uvicorn.run(
        "smartops.main:app",
        host=args.host,
        port=args.port,
        log_level=LOG_LEVEL.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
