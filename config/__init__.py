"""
Configuration package for the list controller.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# === CONFIG ===
SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key-change-this-in-production")

# List Configuration
LIST_PAGE_SIZE = int(os.getenv("LIST_PAGE_SIZE", "10"))  # 0 = everything on one page
LIST_PAGE_LOT_SIZE = 5  # page selector buttons per lot, fixed
LIST_DATA_FILE = os.getenv("LIST_DATA_FILE")  # optional JSON array loaded at startup

# Server Configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

__all__ = [
    'SECRET_KEY',
    'LIST_PAGE_SIZE',
    'LIST_PAGE_LOT_SIZE',
    'LIST_DATA_FILE',
    'HOST',
    'PORT',
    'LOG_LEVEL',
]
