"""Configuration I/O for chaindiag."""

from chaindiag.io.config import generate_default_config, load_config, save_config

__all__ = ["generate_default_config", "load_config", "save_config"]
