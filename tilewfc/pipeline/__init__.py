"""Learn-once / solve-with-retries orchestration."""

from .generation_pipeline import (
    GenerationStatus,
    PipelineConfig,
    GenerationResult,
    GenerationPipeline,
)

__all__ = [
    'GenerationStatus',
    'PipelineConfig',
    'GenerationResult',
    'GenerationPipeline',
]
