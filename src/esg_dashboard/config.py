# src/esg_dashboard/config.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List
from dotenv import load_dotenv
import json
import yaml
import logging
import os

# Load .env as early as possible
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
SCHEMA_DIR = BASE_DIR / "schemas"

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_INSIGHT_LIMIT = 5
SECTIONS = ("overall", "environmental", "social", "governance")


def load_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_yaml(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class DashboardConfig:
    def __init__(self):
        self.openai_model: str = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.insight_limit: int = int(
            os.getenv("ESG_INSIGHT_LIMIT", str(DEFAULT_INSIGHT_LIMIT))
        )
        self.log_level: str = os.getenv("ESG_LOG_LEVEL", "INFO")

        self.insight_prompts: Dict[str, Dict[str, Any]] = load_yaml(
            SCHEMA_DIR / "insight_prompts.yaml"
        )
        missing = [s for s in SECTIONS if s not in self.insight_prompts]
        if missing:
            raise ValueError(f"insight_prompts.yaml is missing sections: {missing}")

    def system_prompt(self, section: str) -> str:
        return self.insight_prompts[section]["system_prompt"]

    def fallback_insights(self, section: str) -> List[str]:
        return list(self.insight_prompts[section].get("fallback") or [])

    def demo_dataset(self) -> Dict[str, Any]:
        """Fresh copy of the dataset shown before the first upload."""
        return load_json(SCHEMA_DIR / "demo_dataset.json")


def load_config():
    return DashboardConfig()


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logger. Safe to call multiple times; later calls only
    change the level. Unknown level names fall back to INFO.
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger().setLevel(numeric_level)


# Run once automatically
setup_logging(os.getenv("ESG_LOG_LEVEL", "INFO"))
