"""
Grid resolution: turns candidate gutters into exact per-cell rectangles.

Detection is never assumed perfect. Excess candidates are reduced to the
most evenly spaced subset, missing dividers are filled at equal-division
positions and the result is flagged degraded instead of failing.
"""
from typing import List, Optional, Tuple

from ..core.interfaces import (
    Axis,
    AxisTrace,
    CellBoundary,
    GridDetectionConfig,
    GridInfo,
    GridTrace,
    GutterRegion,
)
from .gutters import round_half_up


class GridResolver:
    """Combines detected gutters with the expected grid shape."""

    def __init__(self, config: Optional[GridDetectionConfig] = None):
        self.config = config or GridDetectionConfig()

    def resolve(
        self,
        column_regions: List[GutterRegion],
        row_regions: List[GutterRegion],
        width: int,
        height: int,
        rows: int,
        cols: int,
        strategy: str = "variance",
        column_trace: Optional[AxisTrace] = None,
        row_trace: Optional[AxisTrace] = None,
    ) -> GridInfo:
        """
        Build the row-major CellBoundary list for an expected rows x cols grid.

        Args:
            column_regions: Gutters found along x (vertical dividers and margins)
            row_regions: Gutters found along y (horizontal dividers and margins)
            width: Image width in pixels
            height: Image height in pixels
            rows: Expected row count
            cols: Expected column count
            strategy: Name recorded on the resulting GridInfo
            column_trace: Optional trace pre-filled by the caller (threshold etc.)
            row_trace: Optional trace pre-filled by the caller

        Returns:
            GridInfo with exactly rows * cols cells
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must have at least one row and column, got {rows}x{cols}")

        column_trace = column_trace or AxisTrace(Axis.COLUMNS, width, cols)
        row_trace = row_trace or AxisTrace(Axis.ROWS, height, rows)

        x_spans = self.resolve_axis(column_regions, width, cols, column_trace)
        y_spans = self.resolve_axis(row_regions, height, rows, row_trace)

        cells = [
            CellBoundary(x=x_start, y=y_start, width=x_len, height=y_len)
            for y_start, y_len in y_spans
            for x_start, x_len in x_spans
        ]

        trace = GridTrace(columns=column_trace, rows=row_trace)
        trace.confidence = self.confidence(cells, column_trace, row_trace)
        for axis_trace in (column_trace, row_trace):
            if axis_trace.shortfall:
                trace.notes.append(
                    f"{axis_trace.axis.value}: {axis_trace.shortfall} divider(s) missing, "
                    f"filled at equal-division positions"
                )
            if axis_trace.excess:
                trace.notes.append(
                    f"{axis_trace.axis.value}: {axis_trace.excess} extra candidate(s) discarded"
                )

        return GridInfo(
            rows=rows,
            cols=cols,
            cells=cells,
            strategy=strategy,
            degraded=column_trace.degraded or row_trace.degraded,
            trace=trace,
        )

    def resolve_axis(
        self,
        regions: List[GutterRegion],
        extent: int,
        expected: int,
        trace: AxisTrace,
    ) -> List[Tuple[int, int]]:
        """
        Resolve one axis into `expected` (start, length) intervals.

        Fills content bounds, selected dividers, margin and shortfall/excess
        counts on the given trace.
        """
        trace.regions = list(regions)
        content_start, content_end, internal = self._split_margins(regions, extent, trace)
        trace.content_start = content_start
        trace.content_end = content_end

        needed = expected - 1
        span = content_end - content_start + 1

        if len(internal) > needed:
            dividers = self._select_evenly(internal, needed, content_start, span)
            trace.excess = len(internal) - needed
        elif len(internal) < needed:
            dividers = self._fill_shortfall(internal, needed, content_start, span)
            trace.shortfall = needed - len(internal)
        else:
            dividers = list(internal)

        dividers.sort(key=lambda region: region.start)
        trace.dividers = dividers

        margin = self.safety_margin(dividers)
        trace.margin = margin

        return self._intervals(dividers, content_start, content_end, expected, margin)

    def _split_margins(
        self,
        regions: List[GutterRegion],
        extent: int,
        trace: AxisTrace,
    ) -> Tuple[int, int, List[GutterRegion]]:
        """Separate edge margins from internal regions and derive content bounds."""
        edge = self.config.edge_fraction * extent
        content_start = 0
        content_end = extent - 1
        internal: List[GutterRegion] = []

        for region in regions:
            leading = region.start <= edge
            trailing = region.end >= extent - 1 - edge
            if leading and trailing:
                # Uniform across the whole axis: nothing to anchor on.
                continue
            if leading:
                content_start = max(content_start, region.end + 1)
            elif trailing:
                content_end = min(content_end, region.start - 1)
            else:
                internal.append(region)

        if content_end < content_start:
            content_start, content_end = 0, extent - 1

        return content_start, content_end, internal

    def _select_evenly(
        self,
        candidates: List[GutterRegion],
        needed: int,
        content_start: int,
        span: int,
    ) -> List[GutterRegion]:
        """Greedy pick of the most evenly spaced subset of candidates."""
        if needed <= 0:
            return []

        ordered = sorted(candidates, key=lambda region: region.start)
        ideal = span / (needed + 1)
        min_gap = self.config.spacing_tolerance * ideal

        kept: List[GutterRegion] = []
        previous = float(content_start)
        for region in ordered:
            if len(kept) == needed:
                break
            if region.center - previous >= min_gap:
                kept.append(region)
                previous = region.center

        if len(kept) < needed:
            kept = ordered[:needed]
        return kept

    @staticmethod
    def _fill_shortfall(
        detected: List[GutterRegion],
        needed: int,
        content_start: int,
        span: int,
    ) -> List[GutterRegion]:
        """Keep every detected divider and add synthetic ones at equal-division slots."""
        ideal = span / (needed + 1)
        slots = [content_start + ideal * k for k in range(1, needed + 1)]
        dividers = list(detected)

        while len(dividers) < needed and slots:
            def distance(slot: float) -> float:
                if not dividers:
                    return float("inf")
                return min(abs(slot - d.center) for d in dividers)

            best = max(slots, key=distance)
            slots.remove(best)
            position = round_half_up(best)
            dividers.append(GutterRegion(start=position, end=position, synthetic=True))

        return dividers

    def safety_margin(self, dividers: List[GutterRegion]) -> int:
        """max(floor, round(mean detected gutter width * ratio))."""
        detected = [d for d in dividers if not d.synthetic]
        if not detected:
            return self.config.margin_floor
        average = sum(d.width for d in detected) / len(detected)
        return max(self.config.margin_floor, round_half_up(average * self.config.margin_ratio))

    @staticmethod
    def _intervals(
        dividers: List[GutterRegion],
        content_start: int,
        content_end: int,
        expected: int,
        margin: int,
    ) -> List[Tuple[int, int]]:
        intervals = []
        for index in range(expected):
            raw_start = content_start if index == 0 else dividers[index - 1].end + 1
            raw_end = content_end if index == expected - 1 else dividers[index].start - 1

            start = raw_start + margin
            end = raw_end - margin
            if end < start:
                # Too narrow for the margin; fall back to the raw span.
                start, end = raw_start, max(raw_start, raw_end)

            intervals.append((start, end - start + 1))
        return intervals

    @staticmethod
    def confidence(
        cells: List[CellBoundary],
        column_trace: AxisTrace,
        row_trace: AxisTrace,
    ) -> float:
        """
        Share of dividers actually detected times cell-area uniformity.

        1.0 means every divider was found and all cells have the same area.
        """
        needed = (column_trace.expected - 1) + (row_trace.expected - 1)
        detected = column_trace.detected_dividers + row_trace.detected_dividers
        detected_ratio = 1.0 if needed == 0 else detected / needed

        areas = [cell.area for cell in cells]
        largest = max(areas) if areas else 0
        uniformity = (min(areas) / largest) if largest > 0 else 0.0

        return detected_ratio * uniformity
