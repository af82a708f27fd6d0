import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent.parent

class Config:
    # --- Logging ---
    LOGGER_NAME = os.getenv("LOGGER_NAME", "Forma")

    # --- Forecast ---
    PROJECTION_DAYS = int(os.getenv("PROJECTION_DAYS", "7"))

    # --- Ramp Rate ---
    RAMP_RATE_MIN_SAMPLES = int(os.getenv("RAMP_RATE_MIN_SAMPLES", "14"))
    RAMP_RATE_MAX_POINTS = int(os.getenv("RAMP_RATE_MAX_POINTS", "84"))  # 12 weeks

    # --- Streams ---
    MAX_SAMPLE_GAP_SEC = float(os.getenv("MAX_SAMPLE_GAP_SEC", "30"))
    VALIDATION_MIN_HR = int(os.getenv("VALIDATION_MIN_HR", "25"))
    VALIDATION_MAX_HR = int(os.getenv("VALIDATION_MAX_HR", "250"))
    MIN_HR_STREAM_LENGTH = int(os.getenv("MIN_HR_STREAM_LENGTH", "60"))

    # --- Load Chain Recompute ---
    CHAIN_EPSILON = float(os.getenv("CHAIN_EPSILON", "0.01"))
    CHAIN_CONVERGENCE_WINDOW = int(os.getenv("CHAIN_CONVERGENCE_WINDOW", "14"))

    # --- Athlete Defaults ---
    DEFAULT_REST_HR = int(os.getenv("DEFAULT_REST_HR", "55"))
    DEFAULT_MAX_HR = int(os.getenv("DEFAULT_MAX_HR", "190"))
    DEFAULT_THRESHOLD_PACE = float(os.getenv("DEFAULT_THRESHOLD_PACE", "270"))  # s/km (4:30)
    DEFAULT_THRESHOLD_POWER = float(os.getenv("DEFAULT_THRESHOLD_POWER", "250"))  # W
