"""
Track catalog processing for the Moodwave system.
"""
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from ..catalog.sound_features import FEATURE_NAMES, NEUTRAL_FEATURES
from .schemas import CandidateTrack, SoundFeatureVector
from .validator import DataValidator


class CatalogProcessor:
    """Loads a local track catalog and turns its rows into candidate tracks."""

    LIST_SEPARATOR = ';'

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 validator: Optional[DataValidator] = None):
        """Initialize the processor.

        Args:
            config: Catalog configuration dictionary
            validator: Data validator instance (optional)
        """
        self.config = config or {}
        self.validator = validator or DataValidator()
        self.logger = logging.getLogger(__name__)

    def load_dataset(self, path: Optional[str] = None) -> pd.DataFrame:
        """Load a catalog from a CSV or JSON file.

        Args:
            path: Path to the catalog (uses config path if None)

        Returns:
            Loaded DataFrame

        Raises:
            ValueError: If no path is configured, the file cannot be parsed
                or validation fails
            FileNotFoundError: If the catalog file doesn't exist
        """
        dataset_path = path or self.config.get('catalog_path')
        if not dataset_path:
            raise ValueError("No catalog path provided in config or parameter")
        if not os.path.exists(dataset_path):
            raise FileNotFoundError(f"Catalog file not found: {dataset_path}")
        try:
            if dataset_path.endswith('.json'):
                df = pd.read_json(dataset_path, orient='records')
            else:
                df = pd.read_csv(dataset_path)
        except Exception as e:
            raise ValueError(f"Failed to load catalog file: {e}")
        return self.validate(df)

    def validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """Validate a catalog frame, raising on errors and logging warnings."""
        validation_result = self.validator.validate_all(df)
        if validation_result.has_errors():
            error_msg = "Catalog validation failed:\n" + "\n".join(validation_result.errors)
            raise ValueError(error_msg)
        for warning in validation_result.warnings:
            self.logger.warning("Catalog validation warning: %s", warning)
        return df

    def _handle_missing_values(self, df: pd.DataFrame) -> pd.DataFrame:
        """Fill gaps with neutral defaults so every row converts cleanly."""
        df_processed = df.copy()
        feature_cols_in_df = [col for col in FEATURE_NAMES if col in df_processed.columns]
        for col in feature_cols_in_df:
            df_processed[col] = pd.to_numeric(df_processed[col], errors='coerce').fillna(NEUTRAL_FEATURES[col])
        for col in ['album', 'artists', 'genres']:
            if col in df_processed.columns:
                df_processed[col] = df_processed[col].fillna('')
        if 'popularity' in df_processed.columns:
            df_processed['popularity'] = pd.to_numeric(df_processed['popularity'], errors='coerce').fillna(0)
        if 'explicit' in df_processed.columns:
            df_processed['explicit'] = df_processed['explicit'].fillna(False)
        df_processed['duration_ms'] = pd.to_numeric(df_processed['duration_ms'], errors='coerce').fillna(0)
        return df_processed

    def _split_list(self, value: Any) -> List[str]:
        if isinstance(value, (list, tuple)):
            return [str(v).strip() for v in value if str(v).strip()]
        return [part.strip() for part in str(value).split(self.LIST_SEPARATOR) if part.strip()]

    @staticmethod
    def _parse_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {'true', '1', 'yes', 'y'}
        return bool(value)

    def to_candidates(self, df: pd.DataFrame) -> List[CandidateTrack]:
        """Convert a validated catalog frame into candidate tracks.

        Rows without any sound feature column get ``features=None`` so the
        scorer falls back to the neutral estimate; partially populated rows
        are filled with neutral defaults and clamped into valid ranges.
        """
        df_clean = self._handle_missing_values(df)
        has_features = any(col in df_clean.columns for col in FEATURE_NAMES)
        tracks = []
        for row in df_clean.to_dict(orient='records'):
            features = None
            if has_features:
                features = SoundFeatureVector.from_mapping(row).clamped()
            popularity = int(max(0, min(100, row.get('popularity', 0))))
            tracks.append(CandidateTrack(
                id=str(row['id']),
                name=str(row['name']),
                artists=self._split_list(row.get('artists', '')),
                album=str(row.get('album', '')),
                duration_ms=int(row['duration_ms']),
                explicit=self._parse_bool(row.get('explicit', False)),
                popularity=popularity,
                features=features,
                genres=[g.lower() for g in self._split_list(row.get('genres', ''))],
                uri=row.get('uri') if isinstance(row.get('uri'), str) else None
            ))
        self.logger.debug("Converted %d catalog rows to candidate tracks", len(tracks))
        return tracks

    def process_full_pipeline(self, catalog_path: Optional[str] = None) -> List[CandidateTrack]:
        """Load, validate and convert a catalog in one step."""
        df = self.load_dataset(catalog_path)
        return self.to_candidates(df)
