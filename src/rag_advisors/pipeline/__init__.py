"""Retrieval-augmentation pipeline orchestration."""

from .callbacks import PIPELINE_EVENTS, PipelineCallback, notify_callbacks
from .pipeline import PipelineDiagnostics, PipelineResult, RetrievalAugmentationPipeline

__all__ = [
    "PIPELINE_EVENTS",
    "PipelineCallback",
    "PipelineDiagnostics",
    "PipelineResult",
    "RetrievalAugmentationPipeline",
    "notify_callbacks",
]
