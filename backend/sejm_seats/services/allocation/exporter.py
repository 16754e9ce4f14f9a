from __future__ import annotations

import csv
import json
from pathlib import Path

from sejm_seats.schemas.allocation import ElectionResult
from sejm_seats.services.allocation.national import rank_groupings
from sejm_seats.services.allocation.validators import validate_election
from sejm_seats.utils.logger import get_logger

logger = get_logger(__name__)


def export_results(result: ElectionResult, output_dir: str | Path) -> dict[str, Path]:
    """Write region/national CSVs and a JSON summary into ``output_dir``."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    # Per-region seats (and winners, when they were computed)
    region_path = output_dir / "region_results.csv"
    with open(region_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["region", "seat_count", "grouping", "seats", "winners"])
        writer.writeheader()
        for r in result.regions:
            for row in rank_groupings(r.seats_by_grouping):
                winners = (r.winners_by_grouping or {}).get(row.grouping, [])
                writer.writerow({
                    "region": r.region_index,
                    "seat_count": r.seat_count,
                    "grouping": row.grouping,
                    "seats": row.seats,
                    "winners": "; ".join(winners),
                })

    national_path = output_dir / "national_results.csv"
    with open(national_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["grouping", "seats"])
        writer.writeheader()
        for row in result.national.ranking:
            writer.writerow({"grouping": row.grouping, "seats": row.seats})

    summary_path = output_dir / "summary.json"
    summary = {
        "total_seats": result.national.total_seats,
        "national_seats": result.national.seats_by_grouping,
        "regions_counted": result.national.regions_counted,
        "failures": [f.model_dump() for f in result.failures],
        "validation": validate_election(result).model_dump(),
    }
    with open(summary_path, "w", encoding="utf-8") as f:
        json.dump(summary, f, ensure_ascii=False, indent=2)

    logger.info("Results written to %s", output_dir)
    return {"regions": region_path, "national": national_path, "summary": summary_path}
