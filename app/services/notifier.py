"""Change notifications for live dashboards

Delivery is best effort: no persistence, no replay, and a publish with no
subscribers is a successful no-op. Failures are logged, never raised to the
request that triggered the change.
"""

import asyncio
import enum
import json
from typing import Optional, Protocol, Set

import redis.asyncio as redis
from redis.exceptions import RedisError
import structlog

from app.config import Settings

logger = structlog.get_logger()


class ChangeEvent(str, enum.Enum):
    RESERVATION_CREATED = "reservation-created"
    RESERVATION_UPDATED = "reservation-updated"
    RESERVATION_CANCELLED = "reservation-cancelled"
    RESERVATION_DELETED = "reservation-deleted"
    TIMESLOT_CREATED = "timeslot-created"
    TIMESLOT_UPDATED = "timeslot-updated"
    TIMESLOT_DELETED = "timeslot-deleted"


class ChangeNotifier(Protocol):
    async def publish(self, event: str, payload: dict) -> None:
        ...


class LocalNotifier:
    """Fans events out to in-process subscriber queues."""

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscribers: Set[asyncio.Queue] = set()

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def publish(self, event: str, payload: dict) -> None:
        self._broadcast({"event": _event_name(event), "payload": payload})

    def _broadcast(self, message: dict) -> None:
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                logger.warning("Dropping event for slow subscriber", event_name=message.get("event"))

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        self._subscribers.clear()


class RedisNotifier(LocalNotifier):
    """Publishes through a redis channel so every worker's subscribers see every event."""

    def __init__(self, redis_url: str, channel: str, queue_size: int = 100, client: Optional[redis.Redis] = None):
        super().__init__(queue_size=queue_size)
        self.channel = channel
        self._client = client or redis.from_url(redis_url, decode_responses=True, encoding="utf-8")
        self._listener: Optional[asyncio.Task] = None

    async def publish(self, event: str, payload: dict) -> None:
        message = json.dumps({"event": _event_name(event), "payload": payload})
        try:
            await self._client.publish(self.channel, message)
        except RedisError as e:
            logger.warning("Failed to publish event", event_name=_event_name(event), error=str(e))

    async def ping(self) -> bool:
        return await self._client.ping()

    async def start(self) -> None:
        if self._listener is None:
            self._listener = asyncio.create_task(self._listen())
            logger.info("Listening for change events", channel=self.channel)

    async def stop(self) -> None:
        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            self._listener = None
        await self._client.aclose()
        await super().stop()

    async def _listen(self) -> None:
        pubsub = self._client.pubsub()
        await pubsub.subscribe(self.channel)
        try:
            async for raw in pubsub.listen():
                if raw.get("type") != "message":
                    continue
                try:
                    message = json.loads(raw["data"])
                except (TypeError, ValueError):
                    logger.warning("Ignoring malformed event", channel=self.channel)
                    continue
                self._broadcast(message)
        except RedisError as e:
            logger.error("Change event listener stopped", channel=self.channel, error=str(e))
        finally:
            await pubsub.aclose()


def build_notifier(settings: Settings) -> LocalNotifier:
    """Create the notifier configured for this process"""
    if settings.notifier_backend == "redis":
        return RedisNotifier(
            settings.redis_url,
            settings.notifier_channel,
            queue_size=settings.notifier_queue_size,
        )
    return LocalNotifier(queue_size=settings.notifier_queue_size)


def _event_name(event) -> str:
    return event.value if isinstance(event, ChangeEvent) else str(event)
