"""Pytest configuration and fixtures."""
import sys
import os
import pytest

# Add the CDK app and Lambda directories to Python path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, ROOT)
sys.path.insert(0, os.path.join(ROOT, 'infrastructure'))
sys.path.insert(0, os.path.join(ROOT, 'queue_handler_lambda'))


def pytest_configure(config):
    config.addinivalue_line('markers', 'integration: deploys a real stack to AWS')


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables between tests."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sqs_event():
    """Return an SQS event carrying an SNS notification of an empty message."""
    return {
        'Records': [{
            'messageId': 'message-123',
            'eventSource': 'aws:sqs',
            'eventSourceARN': 'arn:aws:sqs:us-west-2:123456789012:queue',
            'body': '{"Type": "Notification", "MessageId": "sns-456", '
                    '"TopicArn": "arn:aws:sns:us-west-2:123456789012:topic", '
                    '"Message": "{}"}'
        }]
    }


@pytest.fixture
def handler_log_events():
    """Return CloudWatch log events as written by the Python Lambda runtime."""
    return [
        {'timestamp': 1700000000000, 'message': 'START RequestId: req-1 Version: $LATEST\n'},
        {'timestamp': 1700000000100,
         'message': '[INFO]\t2023-11-14T22:13:20.100Z\treq-1\tMessage message-123: {}\n'},
        {'timestamp': 1700000000200,
         'message': '[INFO]\t2023-11-14T22:13:20.200Z\treq-1\tHandled SQS Event with 1 record(s)\n'},
        {'timestamp': 1700000000300, 'message': 'END RequestId: req-1\n'},
    ]
