"""Harness configuration loaded from the environment."""
import os
from dataclasses import dataclass

DEFAULT_APP_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _float_env(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from None


@dataclass(frozen=True)
class HarnessConfig:
    """Settings shared by the deploy, publish, poll and destroy phases."""

    region: str = 'us-west-2'
    cdk_command: str = 'npx cdk'
    app_dir: str = DEFAULT_APP_DIR
    log_wait_timeout: float = 60.0
    log_wait_initial_delay: float = 2.0
    log_wait_max_delay: float = 15.0

    @classmethod
    def from_env(cls) -> 'HarnessConfig':
        """Build the configuration from environment variables.

        Returns:
            HarnessConfig: Configuration with defaults for unset variables.

        Raises:
            ValueError: If a wait setting is not numeric.
        """
        return cls(
            region=os.environ.get('AWS_REGION') or os.environ.get('CDK_DEFAULT_REGION', 'us-west-2'),
            cdk_command=os.environ.get('CDK_COMMAND', 'npx cdk'),
            app_dir=os.environ.get('CDK_APP_DIR', DEFAULT_APP_DIR),
            log_wait_timeout=_float_env('LOG_WAIT_TIMEOUT', 60.0),
            log_wait_initial_delay=_float_env('LOG_WAIT_INITIAL_DELAY', 2.0),
            log_wait_max_delay=_float_env('LOG_WAIT_MAX_DELAY', 15.0),
        )
