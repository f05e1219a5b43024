"""
Redis Pub/Sub Event Bus Adapter

Publishes events on Redis channels and fans received messages out to local
listeners. Publishing and listening use separate clients because a client
in subscribe mode cannot issue regular commands.
"""

import asyncio
import inspect
from typing import Dict, List, Optional

import structlog
from redis.asyncio import Redis
from redis.asyncio.client import PubSub
from redis.exceptions import ConnectionError as RedisConnectionError

from ...core.config import Settings, get_settings
from ...domain.event_bus.contracts import EventBusAdapter, EventData, Listener
from ...domain.serde.contracts import Serde
from ...domain.serde.errors import DeserializationError
from ...utilities.group import GroupPath, child_group, normalize_group
from ..redis.tracing import trace_command
from ..serde.json_serde import JsonSerde

logger = structlog.get_logger(__name__)

READER_RETRY_DELAY_SECONDS = 1.0


class _Subscriptions:
    """Listener registry and reader task shared by all group views."""

    def __init__(self, listener_client: Redis, serde: Serde):
        self.listener_client = listener_client
        self.serde = serde
        self.listeners: Dict[str, List[Listener]] = {}
        self.pubsub: Optional[PubSub] = None
        self.reader_task: Optional["asyncio.Task[None]"] = None
        self.lock = asyncio.Lock()

    async def subscribe(self, channel: str) -> None:
        if self.pubsub is None:
            self.pubsub = self.listener_client.pubsub(ignore_subscribe_messages=True)
        await self.pubsub.subscribe(channel)
        if self.reader_task is None:
            self.reader_task = asyncio.create_task(self._read())
            logger.info("Started event bus reader")
        logger.info("Subscribed to channel", channel=channel)

    async def unsubscribe(self, channel: str) -> None:
        if self.pubsub is not None:
            await self.pubsub.unsubscribe(channel)
            logger.info("Unsubscribed from channel", channel=channel)

    async def _read(self) -> None:
        pubsub = self.pubsub
        while pubsub is not None:
            try:
                message = await pubsub.get_message(
                    ignore_subscribe_messages=True, timeout=1.0
                )
            except RedisConnectionError:
                logger.exception("Event bus reader lost connection, retrying")
                await asyncio.sleep(READER_RETRY_DELAY_SECONDS)
                continue
            if message is None or message.get("type") != "message":
                continue
            await self._deliver(message["channel"], message["data"])

    async def _deliver(self, channel: str, raw_data: str) -> None:
        try:
            event_data = self.serde.deserialize(raw_data)
        except DeserializationError:
            logger.exception("Dropped undecodable event", channel=channel)
            return
        for listener in list(self.listeners.get(channel, [])):
            try:
                result = listener(event_data)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                # A failing listener must not stop delivery to the others.
                logger.exception("Event listener failed", channel=channel)

    async def close(self) -> None:
        if self.reader_task is not None:
            self.reader_task.cancel()
            try:
                await self.reader_task
            except asyncio.CancelledError:
                pass
            self.reader_task = None
        if self.pubsub is not None:
            await self.pubsub.aclose()
            self.pubsub = None
        self.listeners.clear()
        logger.info("Closed event bus reader")


class RedisPubSubEventBusAdapter(EventBusAdapter):
    """
    Redis pub/sub implementation of the event bus adapter contract.

    Delivery is plain pub/sub fan-out: events published while nobody is
    subscribed are lost. Both clients are shared and never closed here;
    ``close`` only stops the reader and releases the pub/sub connection.
    """

    def __init__(
        self,
        dispatcher_client: Redis,
        listener_client: Redis,
        serde: Optional[Serde] = None,
        root_group: GroupPath = "@global",
        _subscriptions: Optional[_Subscriptions] = None,
    ):
        self._dispatcher_client = dispatcher_client
        self._serde = serde or JsonSerde()
        self._group = normalize_group(root_group)
        self._subscriptions = _subscriptions or _Subscriptions(
            listener_client, self._serde
        )

    @classmethod
    def from_settings(
        cls,
        dispatcher_client: Redis,
        listener_client: Redis,
        serde: Optional[Serde] = None,
        settings: Optional[Settings] = None,
    ) -> "RedisPubSubEventBusAdapter":
        """Adapter scoped to EVENT_BUS_ROOT_GROUP."""
        settings = settings or get_settings()
        return cls(
            dispatcher_client,
            listener_client,
            serde=serde,
            root_group=settings.EVENT_BUS_ROOT_GROUP,
        )

    def _channel(self, event_name: str) -> str:
        return normalize_group([self._group, event_name])

    def get_group(self) -> Optional[str]:
        return self._group

    def with_group(self, group: GroupPath) -> "RedisPubSubEventBusAdapter":
        return RedisPubSubEventBusAdapter(
            self._dispatcher_client,
            self._subscriptions.listener_client,
            serde=self._serde,
            root_group=child_group(self._group, group),
            _subscriptions=self._subscriptions,
        )

    async def add_listener(self, event_name: str, listener: Listener) -> None:
        channel = self._channel(event_name)
        subscriptions = self._subscriptions
        async with subscriptions.lock:
            listeners = subscriptions.listeners.get(channel)
            if listeners is None:
                subscriptions.listeners[channel] = [listener]
                await subscriptions.subscribe(channel)
            elif listener not in listeners:
                listeners.append(listener)

    async def remove_listener(self, event_name: str, listener: Listener) -> None:
        channel = self._channel(event_name)
        subscriptions = self._subscriptions
        async with subscriptions.lock:
            listeners = subscriptions.listeners.get(channel)
            if not listeners or listener not in listeners:
                return
            listeners.remove(listener)
            if not listeners:
                del subscriptions.listeners[channel]
                await subscriptions.unsubscribe(channel)

    async def dispatch(self, event_name: str, event_data: EventData) -> None:
        channel = self._channel(event_name)
        with trace_command("PUBLISH", self._group):
            receivers = await self._dispatcher_client.publish(
                channel, self._serde.serialize(event_data)
            )
        logger.debug("Published event", channel=channel, receivers=receivers)

    async def close(self) -> None:
        """Stop the reader task and close the pub/sub connection."""
        await self._subscriptions.close()
