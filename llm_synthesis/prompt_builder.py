"""Prompt builder for dataset narrative generation."""

from datetime import datetime

from app.domain.equipment import DatasetSummary

_SYSTEM_INSTRUCTIONS = """\
As a senior chemical process engineer, analyze the following dataset summary \
from a chemical plant.
"""

_TASK_INSTRUCTIONS = """\
Please provide a concise technical analysis (approx 150 words) covering:
1. Operational efficiency based on the averages.
2. Any potential safety concerns (e.g., high pressure/temp for typical equipment).
3. Observations on the equipment mix.

Format the response in Markdown.
"""


class NarrativePromptBuilder:
    """Builds the commentary prompt from a dataset summary.

    Only the summary and file metadata are exposed to the model; raw rows
    never leave the service.
    """

    def build_prompt(
        self,
        summary: DatasetSummary,
        file_name: str,
        uploaded_at: datetime,
    ) -> str:
        """Build the full narrative prompt.

        Args:
            summary: Summary of the analysed batch.
            file_name: Display name of the uploaded dataset.
            uploaded_at: Upload timestamp of the batch.

        Returns:
            A fully formatted prompt string ready for LLM consumption.
        """
        distribution = self._format_distribution(summary)
        return (
            f"{_SYSTEM_INSTRUCTIONS}\n"
            f"Dataset Name: {file_name}\n"
            f"Uploaded At: {uploaded_at.isoformat()}\n\n"
            f"Summary Statistics:\n"
            f"- Total Equipment Count: {summary.total_count}\n"
            f"- Average Flowrate: {summary.average_flowrate} m3/h\n"
            f"- Average Pressure: {summary.average_pressure} bar\n"
            f"- Average Temperature: {summary.average_temperature} °C\n\n"
            f"Equipment Type Distribution:\n{distribution}\n\n"
            f"{_TASK_INSTRUCTIONS}"
        )

    def _format_distribution(self, summary: DatasetSummary) -> str:
        if not summary.type_distribution:
            return "- (none)"
        return "\n".join(
            f"- {name}: {count}" for name, count in summary.type_distribution.items()
        )
