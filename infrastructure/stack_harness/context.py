"""Explicit state threaded through the setup, execute and teardown phases."""
from dataclasses import dataclass, field, replace
from typing import Dict

import boto3

from .config import HarnessConfig
from .exceptions import OutputNotFoundError

LAMBDA_LOG_GROUP_PREFIX = '/aws/lambda/'


@dataclass(frozen=True)
class StackContext:
    """A test stack name, its configuration and, once deployed, its outputs."""

    stack_name: str
    config: HarnessConfig = field(default_factory=HarnessConfig)
    outputs: Dict[str, str] = field(default_factory=dict)

    def with_outputs(self, outputs: Dict[str, str]) -> 'StackContext':
        return replace(self, outputs=dict(outputs))

    def output(self, key: str) -> str:
        """Return a deployed output value by key.

        Raises:
            OutputNotFoundError: If the stack has no such output.
        """
        try:
            return self.outputs[key]
        except KeyError:
            raise OutputNotFoundError(self.stack_name, key) from None

    def client(self, service: str):
        return boto3.client(service, region_name=self.config.region)

    @staticmethod
    def log_group_prefix(function_name: str) -> str:
        return f'{LAMBDA_LOG_GROUP_PREFIX}{function_name}'
