"""Prompt templates for summary cards."""

from __future__ import annotations

_NO_PREAMBLE = (
    "Start directly with the summary content - do not include any introductory "
    'phrases like "Here is a summary" or "Summary:".'
)

SUMMARY_SYSTEM = (
    "You are a helpful assistant that creates 4-6 sentence summaries of a "
    "person's notes. Always start directly with the summary content - never "
    "include introductory phrases, labels, or prefixes like \"Here is a "
    'summary", "Summary:", or similar.'
)

_CLUSTER_TEMPLATE = """Summarize the following notes in 4-6 sentences. Focus on the common themes and main ideas. {no_preamble}

{notes}

Summary:"""

_PATH_TEMPLATE = """Based on the following notes, provide a 4-6 sentence summary that answers: "{concept}". Focus on the main themes and key insights from these notes. {no_preamble}

Notes:
{notes}

Summary:"""

_TEMPLATES = {
    "cluster_summary": _CLUSTER_TEMPLATE,
    "path_summary": _PATH_TEMPLATE,
}


def get_prompt_template(task: str) -> str:
    return _TEMPLATES.get(task, _CLUSTER_TEMPLATE)


def get_all_templates() -> dict[str, str]:
    return {"system": SUMMARY_SYSTEM, **_TEMPLATES}


def build_prompt(task: str, source_texts: list[str], concept: str = "") -> str:
    """Fill a template with the joined note excerpts."""
    return get_prompt_template(task).format(
        notes="\n\n".join(source_texts),
        concept=concept or "the concept",
        no_preamble=_NO_PREAMBLE,
    )
