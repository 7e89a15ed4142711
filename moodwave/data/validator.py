"""
Data validation module for the Moodwave system.
"""
from numbers import Real
from typing import Any, Mapping

import pandas as pd

from ..catalog.sound_features import EMOTION_NAMES, FEATURE_NAMES, FEATURE_RANGES as SOUND_RANGES
from .schemas import ValidationResult


class DataValidator:
    """Validates emotion payloads and track catalog frames."""

    REQUIRED_COLUMNS = {
        'id', 'name', 'artists', 'album', 'duration_ms'
    }

    OPTIONAL_COLUMNS = {
        'explicit', 'popularity', 'genres', 'uri', *FEATURE_NAMES
    }

    # Sound attributes share the bounds the engine clamps to.
    FEATURE_RANGES = {
        **SOUND_RANGES,
        'popularity': (0, 100),
        'duration_ms': (1000, 3600000),
    }

    def validate_emotion_payload(self, data: Any) -> ValidationResult:
        """Validate a raw emotion profile payload.

        Unknown emotion names are reported as warnings since they carry no
        weight; wrong types and out-of-range values are errors.

        Args:
            data: Mapping with ``emotions``, ``sentiment`` and ``intensity``

        Returns:
            ValidationResult for the payload
        """
        result = ValidationResult(is_valid=True, errors=[], warnings=[])
        if not isinstance(data, Mapping):
            result.add_error(f"Profile must be a mapping, got {type(data).__name__}")
            return result
        emotions = data.get('emotions')
        if not isinstance(emotions, Mapping):
            result.add_error("Profile is missing an 'emotions' mapping")
            emotions = {}
        for name, value in emotions.items():
            if name not in EMOTION_NAMES:
                result.add_warning(f"Unknown emotion '{name}' ignored")
                continue
            if not self._is_number(value):
                result.add_error(f"Emotion {name} must be a number, got {value!r}")
            elif not (0.0 <= value <= 1.0):
                result.add_error(f"Emotion {name} must be between 0.0 and 1.0, got {value}")
        for key, (low, high) in (('sentiment', (-1.0, 1.0)), ('intensity', (0.0, 1.0))):
            if key not in data:
                continue
            value = data[key]
            if not self._is_number(value):
                result.add_error(f"{key.capitalize()} must be a number, got {value!r}")
            elif not (low <= value <= high):
                result.add_error(f"{key.capitalize()} must be between {low} and {high}, got {value}")
        result.metadata = {
            'emotions_supplied': len(emotions),
            'unknown_emotions': len(result.warnings)
        }
        return result

    def validate_schema(self, df: pd.DataFrame) -> ValidationResult:
        """Validate that a catalog frame carries the required columns.

        Args:
            df: DataFrame to validate

        Returns:
            ValidationResult with schema validation results
        """
        result = ValidationResult(is_valid=True, errors=[], warnings=[])
        missing_columns = self.REQUIRED_COLUMNS - set(df.columns)
        for col in sorted(missing_columns):
            result.add_error(f"Missing required column: {col}")
        extra_columns = set(df.columns) - self.REQUIRED_COLUMNS - self.OPTIONAL_COLUMNS
        for col in sorted(extra_columns):
            result.add_warning(f"Unexpected column found: {col}")
        present_features = [col for col in FEATURE_NAMES if col in df.columns]
        if not present_features:
            result.add_warning("No sound feature columns found; tracks will use neutral estimates")
        result.metadata = {
            'total_columns': len(df.columns),
            'total_rows': len(df),
            'missing_columns_count': len(missing_columns),
            'feature_columns_present': len(present_features)
        }
        return result

    def check_missing_values(self, df: pd.DataFrame) -> ValidationResult:
        """Check for missing values in identifying columns.

        Missing sound features are only warnings: they fall back to neutral
        defaults when the catalog is converted.
        """
        result = ValidationResult(is_valid=True, errors=[], warnings=[])
        missing_counts = df.isnull().sum()
        total_rows = len(df)
        for col, missing_count in missing_counts.items():
            if missing_count == 0:
                continue
            missing_percentage = (missing_count / total_rows) * 100
            if col in {'id', 'name'}:
                result.add_error(f"Critical column {col} has {missing_count} missing values ({missing_percentage:.1f}%)")
            else:
                result.add_warning(f"Column {col} has {missing_count} missing values ({missing_percentage:.1f}%)")
        result.metadata = {
            'total_missing_values': int(missing_counts.sum()),
            'columns_with_missing': int((missing_counts > 0).sum())
        }
        return result

    def validate_ranges(self, df: pd.DataFrame) -> ValidationResult:
        """Validate that feature values are within expected ranges.

        Out-of-range values are warnings; they are clamped on conversion.
        """
        result = ValidationResult(is_valid=True, errors=[], warnings=[])
        for col, (min_val, max_val) in self.FEATURE_RANGES.items():
            if col not in df.columns:
                continue
            valid_data = pd.to_numeric(df[col], errors='coerce').dropna()
            if len(valid_data) == 0:
                continue
            out_of_range = valid_data[(valid_data < min_val) | (valid_data > max_val)]
            if len(out_of_range) > 0:
                result.add_warning(
                    f"Column {col} has {len(out_of_range)} values "
                    f"outside valid range [{min_val}, {max_val}]"
                )
        return result

    def validate_all(self, df: pd.DataFrame) -> ValidationResult:
        """Run all validation checks on a catalog frame."""
        schema_result = self.validate_schema(df)
        missing_result = self.check_missing_values(df)
        range_result = self.validate_ranges(df)
        return ValidationResult(
            is_valid=schema_result.is_valid and missing_result.is_valid and range_result.is_valid,
            errors=schema_result.errors + missing_result.errors + range_result.errors,
            warnings=schema_result.warnings + missing_result.warnings + range_result.warnings,
            metadata={
                'schema_validation': schema_result.metadata,
                'missing_values': missing_result.metadata
            }
        )

    @staticmethod
    def _is_number(value: Any) -> bool:
        return isinstance(value, Real) and not isinstance(value, bool)
