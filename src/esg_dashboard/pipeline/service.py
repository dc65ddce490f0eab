# src/esg_dashboard/pipeline/service.py
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from esg_dashboard.config import DashboardConfig, load_config
from esg_dashboard.insights.llm_insights import generate_insights
from esg_dashboard.pipeline.io_utils import load_upload
from esg_dashboard.pipeline.snapshot import DatasetSnapshot

logger = logging.getLogger(__name__)

InsightFn = Callable[..., List[str]]

SECTION_METRIC_KEYS = {
    "environmental": "environmentalMetrics",
    "social": "socialMetrics",
    "governance": "governanceMetrics",
}


class EsgDashboardService:
    """
    Operations behind the dashboard endpoints, without any web framework:

        - esg_data():            current dataset + overall insights
        - section_insights(s):   one section's metrics + insights
        - upload(name, bytes):   decode, summarise, replace the current dataset
    """

    def __init__(
        self,
        snapshot: Optional[DatasetSnapshot] = None,
        *,
        config: Optional[DashboardConfig] = None,
        insight_fn: InsightFn = generate_insights,
    ) -> None:
        self.config = config or load_config()
        self.snapshot = snapshot or DatasetSnapshot(self.config.demo_dataset())
        self._insight_fn = insight_fn

    def _ask(self, section: str, payload: Mapping[str, Any]) -> List[str]:
        return self._insight_fn(
            self.config.system_prompt(section),
            payload,
            model=self.config.openai_model,
            limit=self.config.insight_limit,
        )

    def esg_data(self) -> Dict[str, Any]:
        current = self.snapshot.get()
        insights = list(current.insights)

        # First request after start-up (or after an upload without insights)
        if not insights:
            insights = self._ask("overall", current.data)
            current = self.snapshot.set_insights(insights, expected=current)
            insights = list(current.insights)

        # Callers get their own copy; the stored snapshot stays untouched
        return {"mockData": copy.deepcopy(current.data), "insights": insights}

    def section_insights(self, section: str) -> Dict[str, Any]:
        key = SECTION_METRIC_KEYS.get(section)
        if key is None:
            raise ValueError(f"Unknown ESG section: {section!r}")

        metrics = copy.deepcopy(self.snapshot.get().data.get(key))
        insights = self._ask(section, metrics or {})
        if not insights:
            logger.info("service: using fallback %s insights", section)
            insights = self.config.fallback_insights(section)

        return {"metrics": metrics, "insights": insights}

    def upload(self, filename: str, content: bytes) -> Dict[str, Any]:
        """
        Raises UploadError when the file cannot become a dataset; the
        current dataset is left untouched in that case.
        """
        data = load_upload(filename, content)
        insights = self._ask("overall", data)

        self.snapshot.replace(data, insights)
        logger.info("service: dataset replaced from %s", filename)

        return {"mockData": data, "insights": insights}
