import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Local storage configuration
DATA_DIRECTORY = os.getenv("INVENTORY_DATA_DIR", "data")
STORE_FILE = os.getenv("INVENTORY_STORE_FILE", "local_storage.json")
STORAGE_KEY = os.getenv("INVENTORY_STORAGE_KEY", "warehouse-inventory")

# Form validation: "relaxed" or "strict"
VALIDATION_POLICY = os.getenv("VALIDATION_POLICY", "relaxed").strip().lower()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")

VALIDATION_POLICIES = ("relaxed", "strict")

def validate_config():
    """Validate that the configuration values are usable."""
    problems = []
    if VALIDATION_POLICY not in VALIDATION_POLICIES:
        problems.append(f"VALIDATION_POLICY={VALIDATION_POLICY!r} (expected one of {', '.join(VALIDATION_POLICIES)})")
    if not STORAGE_KEY:
        problems.append("INVENTORY_STORAGE_KEY is empty")

    if problems:
        raise EnvironmentError(
            f"Invalid configuration: {'; '.join(problems)}. "
            f"Please check your .env file."
        )
