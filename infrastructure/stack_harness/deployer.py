"""Deploy and destroy CDK stacks through the CDK CLI."""
import logging
import shlex
import subprocess
from contextlib import contextmanager
from typing import Dict, Iterator, List

from botocore.exceptions import ClientError

from .context import StackContext
from .exceptions import DeploymentError

logger = logging.getLogger(__name__)


def _run_cdk(context: StackContext, args: List[str]) -> subprocess.CompletedProcess:
    # app.py reads stack name and region from context
    command = shlex.split(context.config.cdk_command) + args + [
        '--context', f'stack_name={context.stack_name}',
        '--context', f'region={context.config.region}',
    ]
    logger.info("Running %s in %s", ' '.join(command), context.config.app_dir)

    try:
        result = subprocess.run(
            command,
            cwd=context.config.app_dir,
            capture_output=True,
            text=True,
            check=False
        )
    except OSError as e:
        raise DeploymentError(context.stack_name, f"could not run {command[0]}: {e}") from e

    logger.debug("cdk output:\n%s%s", result.stdout, result.stderr)
    return result


def get_stack_outputs(stack_name: str, cloudformation_client) -> Dict[str, str]:
    """Read the outputs of a deployed CloudFormation stack.

    Args:
        stack_name: Name of the deployed stack.
        cloudformation_client: boto3 CloudFormation client.

    Returns:
        dict: Output values keyed by output key.

    Raises:
        DeploymentError: If the stack cannot be described.
    """
    try:
        response = cloudformation_client.describe_stacks(StackName=stack_name)
    except ClientError as e:
        raise DeploymentError(stack_name, f"describe_stacks failed: {e}") from e

    stacks = response.get('Stacks', [])
    if not stacks:
        raise DeploymentError(stack_name, "stack not found")

    return {
        output['OutputKey']: output['OutputValue']
        for output in stacks[0].get('Outputs', [])
    }


def deploy_stack(context: StackContext, exclusively: bool = True) -> StackContext:
    """Deploy the stack and return a context carrying its outputs.

    Args:
        context: Stack to deploy.
        exclusively: Deploy only this stack, not its dependencies.

    Returns:
        StackContext: The same context with ``outputs`` populated.

    Raises:
        DeploymentError: If the CLI fails or the outputs cannot be read.
    """
    args = ['deploy', context.stack_name, '--require-approval', 'never']
    if exclusively:
        args.append('--exclusively')

    result = _run_cdk(context, args)
    if result.returncode != 0:
        raise DeploymentError(
            context.stack_name,
            f"cdk deploy exited with {result.returncode}",
            output=result.stderr or result.stdout
        )

    outputs = get_stack_outputs(context.stack_name, context.client('cloudformation'))
    logger.info("Deployed %s with outputs %s", context.stack_name, outputs)
    return context.with_outputs(outputs)


def destroy_stack(context: StackContext, exclusively: bool = True) -> None:
    """Delete the stack.

    Args:
        context: Stack to destroy.
        exclusively: Destroy only this stack, not its dependencies.

    Raises:
        DeploymentError: If the CLI fails.
    """
    args = ['destroy', context.stack_name, '--force']
    if exclusively:
        args.append('--exclusively')

    result = _run_cdk(context, args)
    if result.returncode != 0:
        raise DeploymentError(
            context.stack_name,
            f"cdk destroy exited with {result.returncode}",
            output=result.stderr or result.stdout
        )
    logger.info("Destroyed %s", context.stack_name)


@contextmanager
def with_stack(context: StackContext, exclusively: bool = True) -> Iterator[StackContext]:
    """Deploy the stack for the duration of a block, then destroy it.

    Teardown runs whether deployment or the block succeeded. When the block
    (or the deployment) already failed, a teardown failure is logged and the
    original error propagates.
    """
    failed = False
    try:
        yield deploy_stack(context, exclusively=exclusively)
    except BaseException:
        failed = True
        raise
    finally:
        try:
            destroy_stack(context, exclusively=exclusively)
        except DeploymentError:
            if not failed:
                raise
            logger.exception("Teardown of %s failed after an earlier error", context.stack_name)
