"""Process-wide engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FlowConfig:
    """Configuration for the operation engine."""

    # Result key given to root operation classes that do not set one
    default_result_key: str = "value"
    # State key the caller's input is stored under
    input_key: str = "input"
    # Emit a DEBUG record for every executed or skipped step
    log_steps: bool = True

    @classmethod
    def from_env(cls, prefix: str = "OPFLOW_") -> "FlowConfig":
        """Build a config from ``OPFLOW_*`` environment variables.

        Unset variables keep their defaults.  Call ``load_dotenv()`` first if
        the values live in a ``.env`` file.
        """
        defaults = cls()
        log_steps = os.environ.get(f"{prefix}LOG_STEPS")
        return cls(
            default_result_key=os.environ.get(
                f"{prefix}DEFAULT_RESULT_KEY", defaults.default_result_key
            ),
            input_key=os.environ.get(f"{prefix}INPUT_KEY", defaults.input_key),
            log_steps=(
                defaults.log_steps
                if log_steps is None
                else log_steps.strip().lower() in _TRUTHY
            ),
        )


_config = FlowConfig()


def configure(config: FlowConfig) -> FlowConfig:
    """Replace the process-wide config; returns the previous one."""
    global _config
    previous, _config = _config, config
    return previous


def get_config() -> FlowConfig:
    return _config
