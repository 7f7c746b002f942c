"""Side-channel reporting for recoverable parse anomalies"""

import logging
from typing import Callable


logger = logging.getLogger(__name__)

Reporter = Callable[[Exception, str], None]


def report_error(error: Exception, context: str) -> None:
    """Default reporter: log the anomaly and carry on."""
    logger.warning(f"{context}: {type(error).__name__}: {error}")
