"""
Unit tests for event publishers.
Uses moto to mock Amazon EventBridge.
"""
import json
import logging
import os
from unittest.mock import patch
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from src.repositories.event_publisher import EventBridgePublisher, InMemoryEventPublisher


class TestEventBridgePublisher:
    """Test suite for EventBridgePublisher."""
    
    @pytest.fixture(autouse=True)
    def aws_credentials(self):
        """Mock AWS credentials for moto."""
        os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
        os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
        os.environ['EVENT_BUS_NAME'] = 'supply-chain-test'
        os.environ['EVENT_SOURCE'] = 'drug-supply-chain-test'
        
        yield
        
        for key in ['EVENT_BUS_NAME', 'EVENT_SOURCE']:
            if key in os.environ:
                del os.environ[key]
    
    def _publisher(self):
        from src.core import config
        config.settings = config.Settings()
        return EventBridgePublisher()
    
    @mock_aws
    def test_emit_puts_event(self):
        """Test emit sends the event name as detail type and payload as detail."""
        publisher = self._publisher()
        payload = json.dumps({"drugId": "D1", "reason": "contamination"}).encode()
        
        with patch.object(publisher.client, 'put_events', return_value={'FailedEntryCount': 0, 'Entries': []}) as put_events:
            publisher.emit("Recall", payload)
        
        entry = put_events.call_args.kwargs['Entries'][0]
        assert entry['DetailType'] == "Recall"
        assert entry['Source'] == "drug-supply-chain-test"
        assert entry['EventBusName'] == "supply-chain-test"
        assert json.loads(entry['Detail']) == {"drugId": "D1", "reason": "contamination"}
    
    @mock_aws
    def test_emit_against_moto_bus(self):
        """Test emit succeeds end to end against a mocked bus."""
        publisher = self._publisher()
        publisher.client.create_event_bus(Name='supply-chain-test')
        
        publisher.emit("Shipment", b'{"drugId": "D1", "from": "Manufacturer", "to": "Distributor"}')
    
    @mock_aws
    def test_emit_failure_is_swallowed(self, caplog):
        """Test delivery failures are logged, never raised."""
        publisher = self._publisher()
        error = ClientError({'Error': {'Code': 'InternalException', 'Message': 'boom'}}, 'PutEvents')
        
        with patch.object(publisher.client, 'put_events', side_effect=error):
            with caplog.at_level(logging.WARNING):
                publisher.emit("Recall", b'{"drugId": "D1"}')
        
        assert "Failed to publish event Recall" in caplog.text
    
    @mock_aws
    def test_emit_rejected_entry_is_logged(self, caplog):
        """Test partially failed batches are logged."""
        publisher = self._publisher()
        response = {'FailedEntryCount': 1, 'Entries': [{'ErrorCode': 'Throttled'}]}
        
        with patch.object(publisher.client, 'put_events', return_value=response):
            with caplog.at_level(logging.WARNING):
                publisher.emit("Shipment", b'{"drugId": "D1"}')
        
        assert "was not accepted" in caplog.text


class TestInMemoryEventPublisher:
    """Test suite for InMemoryEventPublisher."""
    
    def test_records_in_order(self):
        publisher = InMemoryEventPublisher()
        
        publisher.emit("Shipment", b"1")
        publisher.emit("Recall", b"2")
        
        assert publisher.events == [("Shipment", b"1"), ("Recall", b"2")]
