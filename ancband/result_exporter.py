import csv
import logging
from pathlib import Path

from .band_analyzer import AnalysisResult
from .models import DifferenceSample, FrequencyRange, MeasurementSlot

logger = logging.getLogger(__name__)

class ResultsExporter:
    """
    Handles exporting band analysis results to CSV files.
    """

    @staticmethod
    def export_report(filepath: Path,
                      before: MeasurementSlot,
                      after: MeasurementSlot,
                      freq_range: FrequencyRange,
                      result: AnalysisResult | None,
                      difference: list[DifferenceSample]):
        """Writes the band metrics followed by the difference curve."""
        with open(filepath, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(["# ANC Band Analysis Export"])
            writer.writerow(["# Before", before.name, f"{len(before)} points"])
            writer.writerow(["# After", after.name, f"{len(after)} points"])
            writer.writerow(["# Band (Hz)", f"{freq_range.start:.1f}", f"{freq_range.end:.1f}"])

            writer.writerow(["Metric", "Value"])
            if result is None:
                writer.writerow(["Status", "No data in band"])
            else:
                writer.writerow(["Avg SPL Before [dB]", f"{result.avg_before:.2f}"])
                writer.writerow(["Avg SPL After [dB]", f"{result.avg_after:.2f}"])
                writer.writerow(["Delta [dB]", f"{result.delta_db:.2f}"])
                writer.writerow(["Power Ratio", f"{result.power_ratio:.4f}"])
                writer.writerow(["Power Reduced [%]", f"{result.reduction_percent:.2f}"])

            writer.writerow([])
            writer.writerow(["Frequency (Hz)", "Difference (After - Before) [dB]"])
            for d in difference:
                writer.writerow([f"{d.frequency:.2f}", f"{d.diff:.2f}"])

        logger.info("Exported report with %d difference points to %s", len(difference), filepath)
