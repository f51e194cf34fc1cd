"""Pipeline framework."""

from wordspine.framework.pipelines.base import Pipeline, PipelineStatus
from wordspine.framework.pipelines.ingest import IngestPipeline, run_ingest

__all__ = [
    "Pipeline",
    "PipelineStatus",
    "IngestPipeline",
    "run_ingest",
]
