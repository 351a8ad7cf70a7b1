"""Process entrypoint: `python serve.py` from the backend directory."""

import logging
import os

import uvicorn
from dotenv import load_dotenv

# Load .env from backend dir (where serve.py runs)
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))
logging.basicConfig(level=logging.INFO)


def main() -> None:
    from app.main import app

    for route in app.routes:
        if hasattr(route, "path") and hasattr(route, "methods"):
            logging.info("App route: %s %s", sorted(route.methods) if route.methods else "GET", route.path)
    uvicorn.run(
        app,
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
    )


if __name__ == "__main__":
    main()
