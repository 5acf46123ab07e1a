"""JSON output formatter."""

import json
from collections.abc import Sequence
from typing import Any

from movcheck.models import AnalysisResult, ScanOutcome


def to_dict(outcome: ScanOutcome) -> dict[str, Any]:
    """Convert a scan outcome to a dictionary.

    Failures carry ``"scanned": false`` so consumers can separate them from
    structural findings without inspecting keys.
    """
    data = outcome.model_dump(mode="json")
    data["scanned"] = isinstance(outcome, AnalysisResult)
    return data


def format_json(outcome: ScanOutcome, indent: int = 2) -> str:
    """Format one scan outcome as JSON string.

    Args:
        outcome: AnalysisResult or ScanFailure
        indent: JSON indentation level

    Returns:
        JSON formatted string
    """
    return json.dumps(to_dict(outcome), indent=indent, ensure_ascii=False)


def format_json_list(outcomes: Sequence[ScanOutcome], indent: int = 2) -> str:
    """Format multiple scan outcomes as JSON array."""
    data = [to_dict(o) for o in outcomes]
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)

