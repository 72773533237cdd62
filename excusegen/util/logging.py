"""
Structured logging for excuse generation, ratings, shares and favorites.
"""

import logging
from typing import Any, Dict, Optional

EXCERPT_LENGTH = 50


def excerpt(text: Optional[str], limit: int = EXCERPT_LENGTH) -> str:
    """Shorten excuse text for log lines."""
    if not text:
        return ""
    return text[:limit] + "..." if len(text) > limit else text


class StructuredLogger:
    """Structured logger for excuse service operations."""

    def __init__(self, name: str = "excusegen"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status == "failed":
            self.logger.error(message)
        else:
            self.logger.info(message)

    def log_generation(self, kind: str, status: str, details: Dict[str, Any] = None):
        """Log a generate/adjust/ultimate call to the text generator."""
        log_details = dict(details or {})
        for field in ("excuse", "original_excuse"):
            if field in log_details:
                log_details[field] = excerpt(log_details[field])

        self.log_operation(f"generation.{kind}", status, log_details)

    def log_rating(self, excuse_id: str, stars: int, average_rating: float, total_ratings: int):
        """Log a submitted rating with the refreshed aggregate."""
        self.log_operation("rating.submitted", "success", {
            "excuse_id": excuse_id,
            "stars": stars,
            "average_rating": round(average_rating, 2),
            "total_ratings": total_ratings
        })

    def log_favorite(self, action: str, excuse_id: str, device_id: str, status: str = "success"):
        """Log a favorites ledger change."""
        self.log_operation(f"favorite.{action}", status, {
            "excuse_id": excuse_id,
            "device_id": device_id
        })

    def log_share(self, excuse_id: str, share_method: str):
        """Log a share event."""
        self.log_operation("share.recorded", "success", {
            "excuse_id": excuse_id,
            "share_method": share_method
        })

    def log_catalog_load(self, situations: int, excuses: int, skipped: int = 0):
        """Log the one-time catalog load."""
        self.log_operation("catalog.loaded", "success", {
            "situations": situations,
            "excuses": excuses,
            "skipped_situations": skipped
        })

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
