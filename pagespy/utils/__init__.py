"""Utils package initialization."""
from pagespy.utils.logger import get_logger, LayerLogger, set_trace_id, get_trace_id
from pagespy.utils.text import normalize, is_absent
from pagespy.utils.urls import absolutize

__all__ = [
    "get_logger",
    "LayerLogger",
    "set_trace_id",
    "get_trace_id",
    "normalize",
    "is_absent",
    "absolutize",
]
