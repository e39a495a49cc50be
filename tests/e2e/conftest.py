"""Live Adobe Target tests; credentials come from TARGET_* or tests/e2e/.env."""
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".env")
