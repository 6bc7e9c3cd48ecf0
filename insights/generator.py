"""
insights/generator.py

Runs the insight rules in their fixed order and collects the sentences
whose conditions hold.
"""

from __future__ import annotations

from typing import Sequence

from app.domain.equipment import AnomalyReport, DatasetSummary, EquipmentRow
from insights.base import BaseInsightRule
from insights.rules import AnomalyShareRule, HighPressureRule, PumpFlowRule


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_DEFAULT_RULES: tuple[BaseInsightRule, ...] = (
    AnomalyShareRule(),
    HighPressureRule(),
    PumpFlowRule(),
)


class InsightGenerator:
    """
    Evaluates insight rules in registration order.

    Rules are stateless, so the default instances are shared across
    generators.
    """

    def __init__(self, rules: Sequence[BaseInsightRule] | None = None) -> None:
        self._rules = tuple(rules) if rules is not None else _DEFAULT_RULES

    def generate(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
        anomalies: AnomalyReport,
    ) -> tuple[str, ...]:
        sentences: list[str] = []
        for rule in self._rules:
            sentence = rule.evaluate(rows, summary, anomalies)
            if sentence is not None:
                sentences.append(sentence)
        return tuple(sentences)
