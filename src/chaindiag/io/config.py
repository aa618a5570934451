"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import pydantic
import tomli_w

from chaindiag.core.domain.config import DiagnosticsConfig
from chaindiag.core.shared.exceptions import ConfigurationError


def load_config(path: Path) -> DiagnosticsConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        DiagnosticsConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the file is not valid TOML or the configuration is invalid.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
        return DiagnosticsConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, pydantic.ValidationError) as exc:
        msg = f"Invalid configuration in {path}: {exc}"
        raise ConfigurationError(msg) from exc


def save_config(config: DiagnosticsConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)

    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# chaindiag configuration file
# Generated automatically - edit as needed

[rhat]
# low <= 1.05 < ok <= 1.10 < high
breakpoints = [1.05, 1.10]

[neff_ratio]
# low <= 0.10 < ok <= 0.50 < high
breakpoints = [0.10, 0.50]

[autocorrelation]
lags = 20
style = "line"  # line, bar
# n_workers = 4  # Uncomment to compute (chain, parameter) groups on threads
"""
