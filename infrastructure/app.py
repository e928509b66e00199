#!/usr/bin/env python3
"""CDK app entry point for the topic/queue/handler test stack."""
import os
import aws_cdk as cdk

from topic_queue_stack import TopicQueueWithHandlerStack


app = cdk.App()

# Get configuration from context or environment
stack_name = app.node.try_get_context('stack_name') or os.environ.get('STACK_NAME', 'TestTopicQueueWithHandler')
region = (
    app.node.try_get_context('region')
    or os.environ.get('CDK_DEFAULT_REGION')
    or os.environ.get('AWS_REGION', 'us-west-2')
)

# Validate required configuration
if not stack_name:
    raise ValueError("stack_name is required. Set via context or STACK_NAME environment variable.")

TopicQueueWithHandlerStack(app, stack_name,
    env=cdk.Environment(
        account=os.environ.get('CDK_DEFAULT_ACCOUNT'),
        region=region
    )
)

app.synth()
