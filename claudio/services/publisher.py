"""Snapshot and daemon event publishers for pub/sub delivery."""

import logging
from typing import List

from pubsub import pub

from ..models.events import BrabbleEvent
from ..models.snapshot import Snapshot

logger = logging.getLogger(__name__)


class SnapshotPublisher:
    """Publishes snapshots using pubsub.pub."""

    def __init__(self, topic: str):
        """Initialize snapshot publisher.

        Args:
            topic: Pub/sub topic name for snapshots
        """
        self.topic = topic
        logger.info(f"SnapshotPublisher initialized with topic: {topic}")

    def publish_snapshot(self, snapshot: Snapshot) -> None:
        pub.sendMessage(self.topic, snapshot=snapshot)
        logger.debug(f"Published snapshot: {len(snapshot.turns)} turns, "
                      f"{len(snapshot.sessions)} sessions, processing={snapshot.is_processing}")

    def subscribe(self, listener) -> None:
        """Register a listener taking a single ``snapshot`` argument.

        pubsub holds listeners weakly, so the caller must keep a reference.
        """
        pub.subscribe(listener, self.topic)

    def unsubscribe_all(self) -> None:
        if pub.getDefaultTopicMgr().getTopic(self.topic, okIfNone=True) is not None:
            pub.unsubAll(topicName=self.topic)


class BrabbleEventPublisher:
    """Publishes batches of daemon events using pubsub.pub."""

    def __init__(self, topic: str):
        """Initialize daemon event publisher.

        Args:
            topic: Pub/sub topic name for daemon event batches
        """
        self.topic = topic
        logger.info(f"BrabbleEventPublisher initialized with topic: {topic}")

    def publish_events(self, events: List[BrabbleEvent]) -> None:
        pub.sendMessage(self.topic, events=events)
        logger.debug(f"Published {len(events)} daemon events")

    def subscribe(self, listener) -> None:
        """Register a listener taking a single ``events`` argument."""
        pub.subscribe(listener, self.topic)

    def unsubscribe_all(self) -> None:
        if pub.getDefaultTopicMgr().getTopic(self.topic, okIfNone=True) is not None:
            pub.unsubAll(topicName=self.topic)
