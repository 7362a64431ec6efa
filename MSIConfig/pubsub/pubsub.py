"""
In-process publish/subscribe bus
"""

import itertools
import queue
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Tuple, Union

from MSIConfig.config.logger_config import get_logger

logger = get_logger(__name__)

Handler = Callable[[Any], None]


class PubSub:
    """
    Fans out published payloads to every handler subscribed to the trigger.

    Handlers run synchronously on the publishing thread. A handler raising an
    exception is logged and the remaining handlers still receive the payload.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._subscriptions: Dict[int, Tuple[str, Handler]] = {}
        self._triggers: Dict[str, List[int]] = defaultdict(list)

    def subscribe(self, trigger: str, handler: Handler) -> int:
        """
        Register a handler for a trigger.

        :param trigger: str, name of the event.
        :param handler: Callable, called with the payload of every publish on the trigger.
        :return: int, subscription id to pass to `unsubscribe`.
        """
        with self._lock:
            subscription_id = next(self._ids)
            self._subscriptions[subscription_id] = (trigger, handler)
            self._triggers[trigger].append(subscription_id)
        return subscription_id

    def unsubscribe(self, subscription_id: int) -> None:
        with self._lock:
            entry = self._subscriptions.pop(subscription_id, None)
            if entry is None:
                return
            trigger, _ = entry
            self._triggers[trigger].remove(subscription_id)
            if not self._triggers[trigger]:
                del self._triggers[trigger]

    def publish(self, trigger: str, payload: Any) -> None:
        # copy under the lock, handlers may (un)subscribe while being called
        with self._lock:
            handlers = [self._subscriptions[sid][1] for sid in self._triggers.get(trigger, ())]
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception(f"Subscriber of '{trigger}' failed")

    def iterator(self, triggers: Union[str, Iterable[str]]) -> "PubSubIterator":
        """
        Blocking iterator over the payloads published on one or more triggers.
        """
        if isinstance(triggers, str):
            triggers = [triggers]
        return PubSubIterator(self, list(triggers))

    def subscription_count(self, trigger: str) -> int:
        with self._lock:
            return len(self._triggers.get(trigger, ()))


class PubSubIterator:
    _CLOSED = object()

    def __init__(self, pubsub: PubSub, triggers: List[str]):
        self._pubsub = pubsub
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._closed = False
        self._subscription_ids = [pubsub.subscribe(trigger, self._queue.put) for trigger in triggers]

    def __iter__(self):
        return self

    def __next__(self) -> Any:
        if self._closed and self._queue.empty():
            raise StopIteration
        payload = self._queue.get()
        if payload is self._CLOSED:
            raise StopIteration
        return payload

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for subscription_id in self._subscription_ids:
            self._pubsub.unsubscribe(subscription_id)
        self._queue.put(self._CLOSED)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
