"""Export functionality for classified prospects (CSV, JSON)."""

import csv
import io
import json
import logging
from pathlib import Path
from typing import Iterable, List

from .models import ClassifiedProspect

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "company_name",
    "scope",
    "industry_id",
    "industry_name",
    "city",
    "region",
    "country",
    "score",
    "website_url",
    "employee_count",
    "annual_revenue",
    "expanded_from",
    "why_now",
]


def _csv_row(item: ClassifiedProspect) -> dict:
    record = item.record
    return {
        "id": record.id,
        "company_name": record.company_name,
        "scope": item.scope.value,
        "industry_id": record.industry_id or "",
        "industry_name": record.industry_name or "",
        "city": record.location.city or "",
        "region": record.location.region,
        "country": record.location.country,
        "score": "" if record.score is None else record.score,
        "website_url": record.website_url or "",
        "employee_count": "" if record.employee_count is None else record.employee_count,
        "annual_revenue": record.annual_revenue or "",
        "expanded_from": record.expanded_from or "",
        "why_now": record.why_now or "",
    }


def format_output(
    classified: Iterable[ClassifiedProspect],
    output_format: str,
    no_headers: bool = False,
) -> str:
    """Format classified prospects for stdout."""
    items: List[ClassifiedProspect] = list(classified)

    if output_format == "json":
        return json.dumps([i.to_dict() for i in items], indent=2, default=str)

    elif output_format == "jsonl":
        return "\n".join(json.dumps(i.to_dict(), default=str) for i in items)

    elif output_format in ("csv", "tsv"):
        delimiter = "\t" if output_format == "tsv" else ","
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=CSV_COLUMNS, delimiter=delimiter)

        if not no_headers:
            writer.writeheader()
        for item in items:
            writer.writerow(_csv_row(item))

        return output.getvalue()

    else:
        raise ValueError(f"Unknown format: {output_format}")


def export_to_csv(classified: Iterable[ClassifiedProspect], output_path: str) -> str:
    """
    Export classified prospects to a CSV file.

    Returns:
        Path to the created file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_output(classified, "csv"), encoding="utf-8")

    logger.info("Exported prospects to %s", path)
    return str(path)


def export_to_json(classified: Iterable[ClassifiedProspect], output_path: str) -> str:
    """
    Export classified prospects to a JSON file.

    Returns:
        Path to the created file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_output(classified, "json"), encoding="utf-8")

    logger.info("Exported prospects to %s", path)
    return str(path)


def export_prospects(
    classified: Iterable[ClassifiedProspect],
    output_path: str,
    output_format: str = "csv",
) -> str:
    """Export in the requested format ("csv" or "json")."""
    if output_format == "csv":
        return export_to_csv(classified, output_path)
    elif output_format == "json":
        return export_to_json(classified, output_path)
    else:
        raise ValueError(f"Unknown format: {output_format}")
