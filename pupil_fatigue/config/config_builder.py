# pupil_fatigue/config/config_builder.py
"""Build configuration objects from CLI arguments."""
from __future__ import annotations

import argparse

from .config import AnalysisSettings, PipelineConfig, StoreConfig
from .constants import BlinkConstants, ServiceDefaults


class ConfigBuilder:
    """Builds configuration objects from parsed CLI arguments.

    Sub-commands only define the options they need, so missing attributes
    fall back to the dataclass defaults.
    """

    @staticmethod
    def build_analysis_settings(args: argparse.Namespace) -> AnalysisSettings:
        """Build the analysis settings echoed into every record."""
        return AnalysisSettings(
            pupil_selection=getattr(args, "pupil_selection", "both"),
            tv_model=getattr(args, "tv_model", ServiceDefaults.DEFAULT_TV_MODEL),
            blink_detection=not getattr(args, "no_blink_detection", False),
        )

    @staticmethod
    def build_pipeline_config(args: argparse.Namespace) -> PipelineConfig:
        """Build pipeline configuration from CLI arguments."""
        return PipelineConfig(
            test_type=getattr(args, "test_type", "pupil_analysis"),
            test_duration_s=getattr(args, "duration", BlinkConstants.DEFAULT_TEST_DURATION_S),
            save_eye_test=not getattr(args, "no_eye_test", False),
            seed=getattr(args, "seed", None),
        )

    @staticmethod
    def build_store_config(args: argparse.Namespace) -> StoreConfig:
        """Build store configuration from CLI arguments."""
        defaults = StoreConfig()
        return StoreConfig(
            store_dir=getattr(args, "store_dir", None),
            user_id=getattr(args, "user_id", None) or defaults.user_id,
        )

    @classmethod
    def build_all_configs(
        cls,
        args: argparse.Namespace,
    ) -> tuple[AnalysisSettings, PipelineConfig, StoreConfig]:
        """Build all configuration objects from CLI arguments.

        Returns:
            Tuple of (analysis_settings, pipeline_config, store_config)
        """
        return (
            cls.build_analysis_settings(args),
            cls.build_pipeline_config(args),
            cls.build_store_config(args),
        )
