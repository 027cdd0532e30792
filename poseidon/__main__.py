"""
Run the web application:
  python -m poseidon
"""

import os

import uvicorn


def main() -> None:
    host = os.getenv("POSEIDON_HOST", "127.0.0.1")
    port = int(os.getenv("POSEIDON_PORT", "8000"))
    reload = os.getenv("POSEIDON_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    uvicorn.run("poseidon.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
