"""Reference scenarios with known outcomes.

Each case builds a bench from scratch, drives it through the public
operations and compares against hand-computed values.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from ..core.config import BenchSettings
from ..optics.layout import AxialLayout
from ..optics.lenses import LensType, calc_radius
from ..optics.state import LensBench
from ..optics.trace import trace_ray

TOL = 1e-9


@dataclass(frozen=True, slots=True)
class CaseResult:
    name: str
    passed: bool
    detail: str = ""


def case_lens_cap(settings: BenchSettings) -> tuple[bool, str]:
    bench = LensBench(settings)
    for _ in range(settings.max_lenses + 1):
        bench.add_lens()
    n_lens, n_dist = len(bench.lenses), len(bench.distances)
    ok = n_lens == settings.max_lenses and n_dist == settings.max_lenses - 1
    return ok, f"{n_lens} lenses, {n_dist} distances"


def case_removal_policy(settings: BenchSettings) -> tuple[bool, str]:
    """Removing the last lens drops the last gap; the first drops gap 0."""
    if settings.max_lenses < 3:
        return True, "skipped: needs three lenses"

    bench = LensBench(settings)
    for _ in range(3):
        bench.add_lens()
    bench.update_distance(0, 0.5)
    bench.update_distance(1, 1.5)
    first, _, last = (lens.id for lens in bench.lenses)

    after_last = bench.snapshot.remove_lens(last).distances
    after_first = bench.snapshot.remove_lens(first).distances
    ok = after_last == (0.5,) and after_first == (1.5,)
    return ok, f"remove last -> {after_last}, remove first -> {after_first}"


def case_rejections(settings: BenchSettings) -> tuple[bool, str]:
    bench = LensBench(settings)
    bench.add_lens()
    lens_id = bench.lenses[0].id
    before = bench.snapshot
    bench.update_power(lens_id, 0)
    bench.update_index(lens_id, settings.min_index - 0.1)
    bench.remove_lens(lens_id + 100)
    ok = bench.snapshot is before
    return ok, "zero power, low index and unknown id left the bench unchanged"


def case_two_lens_scenario(settings: BenchSettings) -> tuple[bool, str]:
    """Powers 6 and 4 at index 1.5, one meter apart."""
    bench = LensBench(settings)
    bench.add_lens()
    bench.add_lens()
    first, second = (lens.id for lens in bench.lenses)
    bench.update_power(first, 6)
    bench.update_power(second, 4)
    bench.update_index(first, 1.5)
    bench.update_index(second, 1.5)
    bench.update_distance(0, 1.0)

    r1, r2 = (lens.r for lens in bench.lenses)
    layout = AxialLayout.from_settings(settings)
    x2 = layout.position_of(1, bench.distances)

    viewport = settings.viewport
    ray = trace_ray(
        viewport.center_y - viewport.lens_height / 4,
        bench.lenses,
        bench.distances,
        layout,
        center_y=viewport.center_y,
        canvas_width=viewport.width,
        damping=settings.damping,
    )
    # canvas y grows downward, so bending toward the axis raises y
    slopes = [
        (ray[i + 1, 1] - ray[i, 1]) / (ray[i + 1, 0] - ray[i, 0]) for i in range(len(ray) - 1)
    ]

    ok = (
        math.isclose(r1, calc_radius(6, 1.5, LensType.BICONVEX), abs_tol=TOL)
        and math.isclose(r2, 0.25, abs_tol=TOL)
        and math.isclose(x2, settings.start_offset_px + settings.pixels_per_meter, abs_tol=TOL)
        and slopes[0] == 0
        and slopes[1] > slopes[0]
        and slopes[2] > slopes[1]
    )
    return ok, f"r1={r1:.4f} r2={r2:.4f} x2={x2:.1f}"


CASES: dict[str, Callable[[BenchSettings], tuple[bool, str]]] = {
    "Lens cap": case_lens_cap,
    "Distance removal policy": case_removal_policy,
    "Silent rejection": case_rejections,
    "Two-lens converging chain": case_two_lens_scenario,
}


def run_all_cases(settings: BenchSettings | None = None) -> list[CaseResult]:
    settings = settings or BenchSettings()
    results = []
    for name, case in CASES.items():
        passed, detail = case(settings)
        results.append(CaseResult(name=name, passed=passed, detail=detail))
    return results
