from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
PUZZLES_DIR = DATA_DIR / "puzzles"

# Results directories
RESULTS_DIR = PROJECT_ROOT / "results"
RESULTS_LOGS_DIR = RESULTS_DIR / "logs"


def ensure_dirs():
    """Create data and results directories if they don't exist"""
    for dir_path in [PUZZLES_DIR, RESULTS_LOGS_DIR]:
        dir_path.mkdir(parents=True, exist_ok=True)


# Board parameters
DEFAULT_RADIUS = 4
MAX_RADIUS = 20

# Generation parameters
CLUE_RATIO = 1 / 3
FILL_RATIO = 0.5
GENERATOR_MAX_ATTEMPTS = 20

# Enumeration parameters
ENUM_CHUNK_SIZE = 4096
ENUM_TIME_LIMIT = 60  # seconds
ENUM_MAX_STATES = None

# Logging configuration
LOG_LEVEL = "INFO"
