"""
Entry point for the User Registry Backend
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from user_registry.app import create_app
from user_registry.config.settings import PORT

logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting User Registry Backend on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
