"""Entry: start the admin console API server."""
import logging
import uvicorn

from nomineeadmin.config import API_HOST, API_PORT, API_RELOAD

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    uvicorn.run(
        "nomineeadmin.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD,
    )
