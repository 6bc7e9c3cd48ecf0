"""
health/normalizer.py

Deterministic deviation and bounding helpers for health scoring.
"""


class DeviationNormalizer:
    """Provides stateless normalization methods for health score inputs.

    All methods are deterministic and produce bounded float outputs.
    No external dependencies, state, or side effects.
    """

    def relative_deviation(self, value: float, mean: float) -> float:
        """Absolute deviation of *value* from *mean*, relative to the mean.

        A zero mean is replaced by 1, so the result degrades to the plain
        absolute deviation for parameters whose batch mean is 0. This can
        overstate the deviation of such parameters.

        Args:
            value: The observed parameter value.
            mean: The batch mean of the parameter.

        Returns:
            A float, negative only when the mean itself is negative.
        """
        denominator = mean if mean != 0 else 1.0
        return abs(value - mean) / denominator

    def clamp(self, value: float, min_value: float, max_value: float) -> float:
        """Clamp a value to the specified [min_value, max_value] range.

        Args:
            value: The float to clamp.
            min_value: The lower bound of the output range.
            max_value: The upper bound of the output range.

        Returns:
            value if within bounds, otherwise min_value or max_value.
        """
        return max(min_value, min(value, max_value))
