"""Errors raised while deploying and exercising a test stack."""


class StackHarnessError(Exception):
    """Base class for harness failures."""


class DeploymentError(StackHarnessError):
    """A deploy, destroy or describe call against the stack failed."""

    def __init__(self, stack_name: str, message: str, output: str = ''):
        super().__init__(f"{stack_name}: {message}")
        self.stack_name = stack_name
        self.output = output


class OutputNotFoundError(StackHarnessError, KeyError):
    """The deployed stack does not expose the requested output key."""

    def __init__(self, stack_name: str, key: str):
        super().__init__(f"{stack_name} has no output {key!r}")
        self.stack_name = stack_name
        self.key = key

    def __str__(self):
        return self.args[0]
