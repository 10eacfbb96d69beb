import logging
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..coordinate_mapper import (db_to_y, freq_to_x, frequency_grid, level_axis_bounds,
                                 level_grid, series_to_points)
from ..models import DifferenceSample, FrequencyRange, HoverReadout, MeasurementSlot

logger = logging.getLogger(__name__)

COLOR_BEFORE = '#94a3b8'
COLOR_AFTER = '#2563eb'
COLOR_DIFF = '#ef4444'
COLOR_BAND = '#fef08a'
COLOR_HANDLE = '#eab308'
COLOR_GRID = '#e2e8f0'

def surface_size(ax: Axes) -> tuple[float, float]:
    """Width/height of an axes in display pixels, the chart's drawing surface."""
    bbox = ax.get_window_extent()
    return max(bbox.width, 1.0), max(bbox.height, 1.0)

class ResultPlotter:
    """
    Draws the response chart and the difference chart.

    Both axes use surface pixel coordinates (x to the right, y downwards),
    and every point is placed through the coordinate mapper, so pointer
    pixels read back from the canvas invert exactly with x_to_freq.
    """

    @staticmethod
    def setup_axes(figure: Figure) -> tuple[Axes, Axes]:
        figure.clear()
        grid = figure.add_gridspec(2, 1, height_ratios=[3.5, 1], hspace=0.35,
                                   left=0.07, right=0.98, top=0.93, bottom=0.08)
        ax_main = figure.add_subplot(grid[0])
        ax_diff = figure.add_subplot(grid[1])
        return ax_main, ax_diff

    @staticmethod
    def plot(figure: Figure,
             before: MeasurementSlot | None,
             after: MeasurementSlot | None,
             freq_range: FrequencyRange,
             difference: list[DifferenceSample],
             hover: HoverReadout | None = None,
             autoscale=True, ymin=30.0, ymax=110.0,
             diff_min=-30.0, diff_max=10.0) -> tuple[Axes, Axes]:

        ax_main, ax_diff = ResultPlotter.setup_axes(figure)

        if before is None or after is None:
            for ax in (ax_main, ax_diff):
                ax.set_axis_off()
            ax_main.text(0.5, 0.5, "Upload data to view chart", ha='center', va='center',
                         color='#94a3b8', transform=ax_main.transAxes)
            return ax_main, ax_diff

        try:
            if autoscale:
                levels = [s.level for s in before.series] + [s.level for s in after.series]
                min_db, max_db = level_axis_bounds(levels)
            else:
                min_db, max_db = ymin, ymax

            ResultPlotter._plot_main(ax_main, before, after, freq_range, hover, min_db, max_db)
            ResultPlotter._plot_difference(ax_diff, difference, freq_range, diff_min, diff_max)
        except Exception as e:
            logger.exception("Plot error")
            ax_main.text(0.5, 0.5, f"Plot Error:\n{str(e)}", ha='center', va='center',
                         color='red', transform=ax_main.transAxes)

        return ax_main, ax_diff

    @staticmethod
    def _prepare_surface(ax: Axes, width: float, height: float):
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.tick_params(labelsize=8, colors='#64748b', length=0)
        for spine in ax.spines.values():
            spine.set_color(COLOR_GRID)

    @staticmethod
    def _frequency_ticks(ax: Axes, width: float):
        ticks = frequency_grid(width)
        ax.set_xticks([x for x, _ in ticks])
        ax.set_xticklabels([label for _, label in ticks])
        for x, _ in ticks:
            ax.axvline(x, color=COLOR_GRID, linestyle=(0, (4, 4)), linewidth=1, zorder=0)

    @staticmethod
    def _band(ax: Axes, freq_range: FrequencyRange, width: float):
        x_start = freq_to_x(freq_range.start, width)
        x_end = freq_to_x(freq_range.end, width)
        ax.axvspan(x_start, max(x_start, x_end), color=COLOR_BAND, alpha=0.2, zorder=0.5)
        return x_start, x_end

    @staticmethod
    def _plot_main(ax, before, after, freq_range, hover, min_db, max_db):
        width, height = surface_size(ax)
        ResultPlotter._prepare_surface(ax, width, height)
        ResultPlotter._frequency_ticks(ax, width)

        db_ticks = level_grid(min_db, max_db)
        y_ticks = [db_to_y(db, height, min_db, max_db) for db in db_ticks]
        ax.set_yticks(y_ticks)
        ax.set_yticklabels([f"{db:g}" for db in db_ticks])
        for y in y_ticks:
            ax.axhline(y, color=COLOR_GRID, linewidth=1, zorder=0)

        x_start, x_end = ResultPlotter._band(ax, freq_range, width)

        xs, ys = series_to_points(before.series, width, height, min_db, max_db)
        ax.plot(xs, ys, color=COLOR_BEFORE, alpha=0.5, linewidth=2, label="Before ANC")
        xs, ys = series_to_points(after.series, width, height, min_db, max_db)
        ax.plot(xs, ys, color=COLOR_AFTER, linewidth=2, label="After ANC")

        # Band handles
        for x, freq in ((x_start, freq_range.start), (x_end, freq_range.end)):
            ax.axvline(x, color=COLOR_HANDLE, linewidth=2, linestyle=(0, (4, 2)))
            ax.plot([x], [height / 2], 'o', color=COLOR_HANDLE, markersize=10)
            ax.text(x, 1.01, f"{round(freq)}", transform=ax.get_xaxis_transform(),
                    ha='center', va='bottom', fontsize=9, fontweight='bold', color='#ca8a04')

        if hover is not None:
            y_before = db_to_y(hover.before, height, min_db, max_db)
            y_after = db_to_y(hover.after, height, min_db, max_db)
            ax.axvline(hover.x, color='#475569', linewidth=1)
            ax.plot([hover.x], [y_before], 'o', color=COLOR_BEFORE, markersize=6)
            ax.plot([hover.x], [y_after], 'o', color=COLOR_AFTER, markersize=6)
            tooltip = (f"{round(hover.frequency)} Hz\n"
                       f"Before: {hover.before:.1f} dB\n"
                       f"After: {hover.after:.1f} dB\n"
                       f"Diff: {hover.diff:.1f} dB")
            ax.text(hover.x + 10, 10, tooltip, ha='left', va='top', fontsize=8, color='white',
                    family='monospace', clip_on=True,
                    bbox=dict(boxstyle='round', facecolor='#0f172a', alpha=0.9))

        ax.set_title("Frequency Response Comparison", loc='left', fontsize=11, fontweight='bold')
        ax.legend(loc='upper right', fontsize=8, frameon=False)

    @staticmethod
    def _plot_difference(ax, difference, freq_range, diff_min, diff_max):
        width, height = surface_size(ax)
        ResultPlotter._prepare_surface(ax, width, height)
        ResultPlotter._frequency_ticks(ax, width)

        zero_y = db_to_y(0.0, height, diff_min, diff_max)
        ax.axhline(zero_y, color=COLOR_BEFORE, linestyle=(0, (2, 2)), linewidth=1)
        ax.set_yticks([db_to_y(diff_max, height, diff_min, diff_max), zero_y,
                       db_to_y(diff_min, height, diff_min, diff_max)])
        ax.set_yticklabels([f"{diff_max:+g}", "0 dB", f"{diff_min:+g}"])

        ResultPlotter._band(ax, freq_range, width)

        if difference:
            # Out-of-window values are pinned to the chart edge for display only
            diffs = np.clip([d.diff for d in difference], diff_min, diff_max)
            xs = [freq_to_x(d.frequency, width) for d in difference]
            ys = db_to_y(diffs, height, diff_min, diff_max)
            ax.plot(xs, ys, color=COLOR_DIFF, linewidth=2)

        ax.set_title("Difference Curve (After - Before)", loc='left', fontsize=10)
