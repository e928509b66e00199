"""Stack that deploys the topic/queue/handler construct for integration tests."""
import os
from typing import Optional

from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from queue_constructs import QueueHandlerProps, TopicQueueWithHandler

QUEUE_HANDLER_ASSET = os.path.join(os.path.dirname(__file__), '..', 'queue_handler_lambda')

# Output keys read back by the integration test
QUEUE_URL_OUTPUT = 'QueueUrl'
QUEUE_HANDLER_NAME_OUTPUT = 'QueueHandlerName'
TOPIC_ARN_OUTPUT = 'TopicArn'


def default_sqs_event_handler() -> QueueHandlerProps:
    """Return the echo handler bundled in ``queue_handler_lambda``."""
    return QueueHandlerProps(
        handler='handler.echo_sqs_event_handler',
        runtime=lambda_.Runtime.PYTHON_3_12,
        code=lambda_.Code.from_asset(os.path.abspath(QUEUE_HANDLER_ASSET))
    )


class TopicQueueWithHandlerStack(Stack):
    """Wraps a single TopicQueueWithHandler and exposes its outputs."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        sqs_event_handler: Optional[QueueHandlerProps] = None,
        **kwargs
    ):
        """Initialize the test stack.

        Args:
            scope: CDK scope.
            id: Stack ID, also used as the construct ID.
            sqs_event_handler: Queue handler descriptor; defaults to the echo handler.
            **kwargs: Additional stack properties.
        """
        super().__init__(scope, id, **kwargs)

        construct = TopicQueueWithHandler(self, id,
            sqs_event_handler=sqs_event_handler or default_sqs_event_handler()
        )

        # Outputs
        CfnOutput(self, QUEUE_URL_OUTPUT, value=construct.queue_url)
        CfnOutput(self, QUEUE_HANDLER_NAME_OUTPUT, value=construct.queue_handler_name)
        CfnOutput(self, TOPIC_ARN_OUTPUT, value=construct.topic_arn)
