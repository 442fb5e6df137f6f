# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import os

import uvicorn


def main() -> None:
    """Serve the host app; ``BUBBLE_HOST_ADDR`` / ``BUBBLE_HOST_PORT`` pick the bind address."""
    uvicorn.run(
        "bubble_data.host.app:app",
        host=os.getenv("BUBBLE_HOST_ADDR", "127.0.0.1"),
        port=int(os.getenv("BUBBLE_HOST_PORT", "8000")),
        log_level=os.getenv("BUBBLE_LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
