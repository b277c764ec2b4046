import os

import uvicorn

from temporal_cache.api.main import app


def main() -> None:
    host = os.getenv("TEMPORAL_CACHE_HOST", "0.0.0.0")
    port = int(os.getenv("TEMPORAL_CACHE_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
