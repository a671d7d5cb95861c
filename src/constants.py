"""Constants for the application."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Logging
LOGGING_LEVEL = os.environ.get("LOGGING_LEVEL", "INFO")

# API settings
API_PREFIX = os.environ.get("API_PREFIX", "/api")

# MongoDB settings
DATABASE_CONNECTION_STRING = os.environ.get("DATABASE_CONNECTION_STRING", "mongodb://localhost:27017")
DATABASE_NAME = os.environ.get("DATABASE_NAME", "tutorhub")
