"""
Event publishers for lifecycle notifications.
Publishing is best effort: failures are logged and never fail a committed transition.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Tuple
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from src.core import config

logger = logging.getLogger(__name__)


class EventPublisher(ABC):
    """Abstract fire-and-forget event sink."""
    
    @abstractmethod
    def emit(self, event_name: str, payload: bytes) -> None:
        """Publish a named event with an opaque byte payload."""
        pass


class EventBridgePublisher(EventPublisher):
    """Publishes lifecycle events to an Amazon EventBridge bus."""
    
    def __init__(self):
        self.client = boto3.client('events', region_name=config.settings.aws_region)
        self.event_bus_name = config.settings.event_bus_name
        self.source = config.settings.event_source
    
    def emit(self, event_name: str, payload: bytes) -> None:
        """
        Put a single event on the bus.
        
        Args:
            event_name: Used as the EventBridge detail type
            payload: UTF-8 JSON document used as the event detail
        """
        try:
            response = self.client.put_events(
                Entries=[
                    {
                        'Source': self.source,
                        'DetailType': event_name,
                        'Detail': payload.decode('utf-8'),
                        'EventBusName': self.event_bus_name
                    }
                ]
            )
            if response.get('FailedEntryCount'):
                logger.warning("Event %s was not accepted by bus %s: %s",
                               event_name, self.event_bus_name, response.get('Entries'))
        except (ClientError, BotoCoreError) as e:
            logger.warning("Failed to publish event %s: %s", event_name, e)


class InMemoryEventPublisher(EventPublisher):
    """Keeps emitted events in order; used locally and in tests."""
    
    def __init__(self):
        self.events: List[Tuple[str, bytes]] = []
    
    def emit(self, event_name: str, payload: bytes) -> None:
        self.events.append((event_name, payload))
