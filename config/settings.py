import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CYCLE_LENGTH = int(os.getenv("DEFAULT_CYCLE_LENGTH", "28"))
DEFAULT_PERIOD_LENGTH = int(os.getenv("DEFAULT_PERIOD_LENGTH", "5"))

# Realistic bounds; values outside are accepted but logged
MIN_CYCLE_LENGTH = int(os.getenv("MIN_CYCLE_LENGTH", "15"))
MAX_CYCLE_LENGTH = int(os.getenv("MAX_CYCLE_LENGTH", "60"))
