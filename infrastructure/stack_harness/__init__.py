"""Deploy, exercise and tear down CDK stacks from tests."""
from .aws_util import (
    HANDLED_MARKER,
    find_log_event,
    get_log_event_in_group,
    publish_message,
    wait_for_log_event,
)
from .config import HarnessConfig
from .context import StackContext
from .deployer import deploy_stack, destroy_stack, get_stack_outputs, with_stack
from .exceptions import DeploymentError, OutputNotFoundError, StackHarnessError

__all__ = [
    'HANDLED_MARKER',
    'DeploymentError',
    'HarnessConfig',
    'OutputNotFoundError',
    'StackContext',
    'StackHarnessError',
    'deploy_stack',
    'destroy_stack',
    'find_log_event',
    'get_log_event_in_group',
    'get_stack_outputs',
    'publish_message',
    'wait_for_log_event',
    'with_stack',
]
