from models.generation import GenerationParams
from models.summary import KEY_POINT_COUNT, SlideSummary

__all__ = ["GenerationParams", "KEY_POINT_COUNT", "SlideSummary"]
