# Services module for the image link analyzer
# Pipeline services live in services/impl/, their interfaces in services/interfaces/

from services.errors import ImageAnalysisError
from services.image_analyzer import analyzeImage, extractURLsFromText, isURL
from services.pipeline_orchestrator import PipelineOrchestrator

__all__ = [
    "analyzeImage",
    "extractURLsFromText",
    "isURL",
    "ImageAnalysisError",
    "PipelineOrchestrator",
]
