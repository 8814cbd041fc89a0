"""
Entry point for the World Property Backend
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from world_property.app import app  # noqa: E402
from world_property.config.settings import PORT  # noqa: E402

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting World Property Backend on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
