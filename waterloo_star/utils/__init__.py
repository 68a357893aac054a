"""
Utilities package initialization.
"""
from .logger import get_logger, log_business_event, log_performance, setup_logging
from .time import utc_now, elapsed_ms

__all__ = ["get_logger", "log_business_event", "log_performance", "setup_logging", "utc_now", "elapsed_ms"]
