"""
Consistency checks on a finished allocation run.

Seat sums per region, winner list lengths, national totals against the
per-region counts, and which regions had to be skipped.
"""

from __future__ import annotations

from pydantic import BaseModel, computed_field

from sejm_seats.schemas.allocation import ElectionResult
from sejm_seats.utils.logger import get_logger

logger = get_logger(__name__)


class ValidationCheck(BaseModel):
    name: str
    passed: bool
    detail: str


class ValidationReport(BaseModel):
    checks: list[ValidationCheck] = []
    warnings: list[str] = []  # failed checks, "name: detail"
    errors: list[str] = []    # broken invariants

    def add_check(self, name: str, passed: bool, detail: str) -> None:
        self.checks.append(ValidationCheck(name=name, passed=passed, detail=detail))
        if not passed:
            self.warnings.append(f"{name}: {detail}")

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    @computed_field
    @property
    def passed(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        total = len(self.checks)
        passed = sum(1 for c in self.checks if c.passed)
        lines = [f"Validation: {passed}/{total} checks passed"]
        if self.warnings:
            lines.append(f"  warnings: {len(self.warnings)}")
            for w in self.warnings[:10]:
                lines.append(f"    - {w}")
        if self.errors:
            lines.append(f"  errors: {len(self.errors)}")
            for e in self.errors:
                lines.append(f"    - {e}")
        return "\n".join(lines)


def validate_election(result: ElectionResult) -> ValidationReport:
    report = ValidationReport()

    # 1. Each region hands out exactly its seats
    for r in result.regions:
        allocated = r.allocated_seats
        report.add_check(
            f"region {r.region_index} seats",
            allocated == r.seat_count,
            f"{allocated}/{r.seat_count} allocated",
        )
        # a region without candidates has nothing to allocate to
        if r.seats_by_grouping and allocated != r.seat_count:
            report.add_error(f"region {r.region_index}: allocated {allocated} of {r.seat_count} seats")
        if any(s < 0 for s in r.seats_by_grouping.values()):
            report.add_error(f"region {r.region_index}: negative seat count")

        # 2. Winner lists match seat counts
        if r.winners_by_grouping is not None:
            short = {
                g: (len(r.winners_by_grouping.get(g, [])), s)
                for g, s in r.seats_by_grouping.items()
                if len(r.winners_by_grouping.get(g, [])) != s
            }
            report.add_check(
                f"region {r.region_index} winners",
                not short,
                "ok" if not short else ", ".join(f"{g}: {n}/{s}" for g, (n, s) in short.items()),
            )

    # 3. National totals equal per-region sums
    expected_totals: dict[str, int] = {}
    for r in result.regions:
        for g, s in r.seats_by_grouping.items():
            expected_totals[g] = expected_totals.get(g, 0) + s
    if expected_totals != result.national.seats_by_grouping:
        report.add_error(
            f"national totals {result.national.seats_by_grouping} differ from region sums {expected_totals}"
        )
    report.add_check(
        "national total",
        result.national.total_seats == sum(r.seat_count for r in result.regions),
        f"{result.national.total_seats} seats over {len(result.regions)} regions",
    )

    # 4. Coverage
    failed = result.failed_regions
    report.add_check(
        "region coverage",
        not failed,
        "all regions counted" if not failed else f"skipped regions {failed}",
    )

    return report
