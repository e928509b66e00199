"""Tests for the queue handler Lambda."""
import json
import logging

from queue_handler_lambda.handler import echo_sqs_event_handler, HANDLED_MARKER
from queue_handler_lambda.sqs_event import decode_body
from stack_harness import HANDLED_MARKER as HARNESS_MARKER, find_log_event


class TestDecodeBody:
    """Tests for SQS record body decoding."""

    def test_decode_body_unwraps_sns_notification(self):
        """Test the SNS envelope is removed and the message decoded."""
        record = {'body': json.dumps({
            'Type': 'Notification',
            'Message': json.dumps({'id': 'submission-123'})
        })}
        assert decode_body(record) == {'id': 'submission-123'}

    def test_decode_body_raw_delivery(self):
        """Test a raw JSON body is returned as is."""
        assert decode_body({'body': '{"id": "submission-123"}'}) == {'id': 'submission-123'}

    def test_decode_body_empty_message(self):
        """Test an empty JSON object is accepted."""
        record = {'body': json.dumps({'Type': 'Notification', 'Message': '{}'})}
        assert decode_body(record) == {}

    def test_decode_body_plain_text(self):
        """Test a non-JSON body is returned as a string."""
        assert decode_body({'body': 'hello'}) == 'hello'

    def test_decode_body_keeps_non_notification_message_field(self):
        """Test a payload with its own Message field is not unwrapped."""
        assert decode_body({'body': '{"Message": "hi"}'}) == {'Message': 'hi'}


class TestEchoHandler:
    """Tests for the echo handler."""

    def test_handler_logs_marker(self, sqs_event, caplog):
        """Test handler logs the handled marker for the batch."""
        with caplog.at_level(logging.INFO):
            result = echo_sqs_event_handler(sqs_event, None)

        assert result['statusCode'] == 200
        assert f'{HANDLED_MARKER} with 1 record(s)' in caplog.messages

    def test_handler_logs_each_message(self, sqs_event, caplog):
        """Test handler echoes the decoded message."""
        with caplog.at_level(logging.INFO):
            echo_sqs_event_handler(sqs_event, None)

        assert 'Message message-123: {}' in caplog.messages

    def test_handler_empty_batch(self, caplog):
        """Test handler still reports an empty batch."""
        with caplog.at_level(logging.INFO):
            result = echo_sqs_event_handler({'Records': []}, None)

        assert result['statusCode'] == 200
        assert f'{HANDLED_MARKER} with 0 record(s)' in caplog.messages


class TestHandledMarker:
    """Tests that the handler and the log lookup agree on the marker."""

    def test_marker_matches_log_lookup(self):
        """Test both sides use the same marker text."""
        assert HANDLED_MARKER == HARNESS_MARKER

    def test_handler_line_is_found_by_log_lookup(self, sqs_event, caplog):
        """Test a runtime-prefixed handler line satisfies the log lookup."""
        with caplog.at_level(logging.INFO):
            echo_sqs_event_handler(sqs_event, None)

        events = [
            {'timestamp': record.created, 'message': f'[INFO]\t2023-11-14T22:13:20Z\treq-1\t{record.getMessage()}\n'}
            for record in caplog.records
        ]
        assert find_log_event(events) is not None
