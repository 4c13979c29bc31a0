"""
Plinth — Configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file
ENV_PATH = Path(__file__).parent / ".env"
load_dotenv(ENV_PATH)

# ── API Keys ──────────────────────────────────────────────────────────
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")

# ── Enhancer Model Config ─────────────────────────────────────────────
ENHANCER_MODEL = os.getenv("PLINTH_ENHANCER_MODEL", "claude-sonnet-4-20250514")
ENHANCER_TIMEOUT = float(os.getenv("PLINTH_ENHANCER_TIMEOUT", "30"))

# (temperature, max_tokens) per capability. Problem inference stays terse,
# alternative positionings are the most exploratory.
ENHANCER_CALLS = {
    "infer_problem": (0.7, 100),
    "improve_value_prop": (0.7, 50),
    "critique_positioning": (0.8, 200),
    "generate_alternatives": (0.9, 300),
    "suggest_category": (0.8, 150),
}

# ── Report Layout ─────────────────────────────────────────────────────
REPORT_WIDTH = 70                   # Width of the ═ rules
WRAP_WIDTH = 65                     # Word-wrap width for prose blocks
HERO_CTA = "Get Started"
MATRIX_ALTERNATIVES_SHOWN = 2       # Alternatives that get a matrix column
PILLAR_COUNT = 3

# ── Paths ─────────────────────────────────────────────────────────────
EXPORT_DIR = Path(os.getenv("PLINTH_EXPORT_DIR", "."))

# ── Logging ───────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("PLINTH_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ── Export Formats ────────────────────────────────────────────────────
EXPORT_EXTENSIONS = {
    "markdown": "md",
    "text": "txt",
    "json": "json",
}
