"""Configuration for PDF PowerTools."""
import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Server
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# Workspace state (tracked PDF files)
WORKSPACE_STATE_FILE = os.getenv(
    "WORKSPACE_STATE_FILE",
    os.path.join(os.path.dirname(os.path.dirname(__file__)), "workspace_state.json"),
)
TRACKED_FILES_KEY = "pdfFiles"

# Preview
THUMBNAIL_SCALE = float(os.getenv("THUMBNAIL_SCALE", "0.4"))

# Size warnings, never enforced
LARGE_FILE_BYTES = 100 * 1024 * 1024  # 100 MB
LARGE_PAGE_COUNT = 5000

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
