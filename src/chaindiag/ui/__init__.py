"""Console and logging setup for chaindiag."""

from chaindiag.ui.logging import close_logging, setup_logging

__all__ = ["close_logging", "setup_logging"]
