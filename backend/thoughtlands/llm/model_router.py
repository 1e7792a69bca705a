"""Task → model selection. Summaries are short prose, so the cheap tier handles them."""

from __future__ import annotations

from thoughtlands.config import settings

_TASK_MODEL_MAP = {
    "cluster_summary": "cheap",
    "path_summary": "cheap",
}


def get_model_for_task(task: str) -> str:
    tier = _TASK_MODEL_MAP.get(task, "cheap")
    if tier == "cheap":
        return settings.model_cheap
    return settings.model_mid
