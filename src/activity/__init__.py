"""Activity logging package."""

from src.activity.logger import ActivityLogger, create_correlation_id, set_log_level

__all__ = ["ActivityLogger", "create_correlation_id", "set_log_level"]
