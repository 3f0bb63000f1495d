from .shaping import annotate_tool_visibility
from .correlator import RequestCorrelator

__all__ = ["RequestCorrelator", "annotate_tool_visibility"]
