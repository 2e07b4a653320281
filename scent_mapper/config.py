"""
Configuration settings for Scent Mapper.

All API keys are OPTIONAL - the analytics work without them.
Label normalization through an LLM requires OPENAI_API_KEY to be set.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env in the project root
_project_root = Path(__file__).parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)

# ===================
# API Keys (All Optional)
# ===================

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

DEFAULT_LLM_MODEL = os.getenv("SCENT_MAPPER_LLM_MODEL", "gpt-4o-mini")

# ===================
# Project Paths
# ===================

PROJECT_ROOT = _project_root
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_DATASET = Path(os.getenv("SCENT_MAPPER_DATA", str(DATA_DIR / "perfume-data.csv")))

# Fragrantica exports are latin-1, not UTF-8
DEFAULT_ENCODING = os.getenv("SCENT_MAPPER_ENCODING", "latin-1")

# ===================
# Dataset Conventions
# ===================

DELIMITER = ";"
ACCORD_PREFIXES = ("accord_", "mainaccord")

RATING_FIELD = "Rating Value"
YEAR_FIELD = "Year"
GENDER_FIELD = "Gender"
TITLE_FIELD = "Perfume"
BRAND_FIELD = "Brand"

# ===================
# Analytics Defaults
# ===================

MAX_CLUSTER_POINTS = 10_000
DEFAULT_K = 10
DEFAULT_YEAR_RANGE = (2019, 2024)
TREND_TOP_N = 5
BAR_CHART_TOP_N = 15
TOP_CLUSTER_LABELS = 3

RANDOM_SEED = 42
KMEANS_N_INIT = 10
KMEANS_MAX_ITER = 300
SILHOUETTE_SAMPLE_SIZE = 2000

# ===================
# Feature Flags
# ===================

def has_openai() -> bool:
    """Check if OpenAI API key is configured."""
    return bool(os.getenv("OPENAI_API_KEY") or OPENAI_API_KEY)
