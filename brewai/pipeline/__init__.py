from .base import PipelineClient
from .gumloop import GumloopClient
from .scripted import ScriptedPipeline, demo_pipeline

from brewai.config import PipelineSettings
from brewai.log import get_logger

log = get_logger(__name__)

__all__ = [
    "PipelineClient", "GumloopClient", "ScriptedPipeline",
    "demo_pipeline", "get_pipeline_client",
]


def get_pipeline_client(settings: PipelineSettings) -> PipelineClient:
    if settings.api_key:
        log.info("Using Gumloop pipeline at %s", settings.base_url)
        return GumloopClient(settings)
    log.info("No GUMLOOP_API_KEY found — using demo pipeline")
    return demo_pipeline()
