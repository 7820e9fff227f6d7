from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from .base_view import FLASH
from .dataset import QUERY_DONE, QUERY_FAIL, QUERY_START
from .events import EventEmitter, Handler
from .scheduler import Scheduler

if TYPE_CHECKING:
    from .base_view import BaseView
    from .dataset import Dataset

logger = logging.getLogger(__name__)

CHANGE = "change"

# one second on screen plus a one second fade
DEFAULT_DISPLAY_SECONDS = 2.0

GENERIC_QUERY_ERROR = "There was an error querying the backend"

FLASH_DEFAULTS: Dict[str, Any] = {
    "message": "Loading",
    "category": "warning",
    "persist": False,
    "loader": False,
}


class Category(str, Enum):
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"


_ids = itertools.count(1)


@dataclass
class Notification:
    """
    A user-facing message.

    - persist: stays until clear() when True
    - loader: marks an in-flight operation; never auto-expires
    """
    message: str
    category: Category = Category.WARNING
    persist: bool = False
    loader: bool = False
    id: int = field(default_factory=lambda: next(_ids))
    created_at: float = field(default_factory=time.time)

    @property
    def expires(self) -> bool:
        return not self.persist and not self.loader


def query_error_message(error: Any) -> str:
    """
    Message for a failed query:
    - plain text is used verbatim
    - a structured value gives "title: message" (either part optional)
    - anything else gives a generic message
    """
    if isinstance(error, str):
        return error

    if isinstance(error, Mapping):
        title, message = error.get("title"), error.get("message")
    elif error is not None and (hasattr(error, "title") or hasattr(error, "message")):
        title, message = getattr(error, "title", None), getattr(error, "message", None)
    else:
        return GENERIC_QUERY_ERROR

    msg = ""
    if title:
        msg = f"{title}: "
    if message:
        msg += str(message)
    return msg


class NotificationCenter:
    """
    Stack of displayed notifications.

    There is no single-pop dequeue: clear() always removes everything and
    cancels any pending expiry timers. Expiry of a notification that is
    already gone is a no-op.
    """

    def __init__(self, scheduler: Scheduler, display_seconds: float = DEFAULT_DISPLAY_SECONDS) -> None:
        self.scheduler = scheduler
        self.display_seconds = display_seconds
        self.events = EventEmitter()
        self._displayed: List[Notification] = []
        self._timers: Dict[int, Any] = {}

    @property
    def notifications(self) -> List[Notification]:
        return list(self._displayed)

    def __len__(self) -> int:
        return len(self._displayed)

    def on_change(self, handler: Handler) -> Handler:
        return self.events.bind(CHANGE, handler)

    def notify(self, flash: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Notification:
        data = dict(FLASH_DEFAULTS)
        data.update(flash or {})
        data.update(kwargs)

        notification = Notification(
            message=str(data["message"]),
            category=Category(data["category"]),
            persist=bool(data["persist"]),
            loader=bool(data["loader"]),
        )
        self._displayed.append(notification)

        if notification.expires:
            self._timers[notification.id] = self.scheduler.call_later(
                self.display_seconds, lambda: self._expire(notification.id)
            )

        logger.debug(
            "Notification shown",
            extra={
                "notification_id": notification.id,
                "category": notification.category.value,
                "persist": notification.persist,
                "loader": notification.loader,
            },
        )
        self.events.trigger(CHANGE)
        return notification

    def clear(self) -> None:
        for handle in self._timers.values():
            self.scheduler.cancel(handle)
        self._timers.clear()

        had_any = bool(self._displayed)
        self._displayed.clear()
        if had_any:
            self.events.trigger(CHANGE)

    clear_notifications = clear

    def _expire(self, notification_id: int) -> None:
        self._timers.pop(notification_id, None)
        before = len(self._displayed)
        self._displayed = [n for n in self._displayed if n.id != notification_id]
        if len(self._displayed) != before:
            self.events.trigger(CHANGE)

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------
    def bind_dataset(self, dataset: Dataset, on_done: Optional[Callable[[], None]] = None) -> None:
        def on_start() -> None:
            self.notify(loader=True, persist=True)

        def on_query_done() -> None:
            self.clear()
            if on_done is not None:
                on_done()

        def on_fail(error: Any = None) -> None:
            self.clear()
            self.notify(message=query_error_message(error), category=Category.ERROR.value, persist=True)

        dataset.bind(QUERY_START, on_start)
        dataset.bind(QUERY_DONE, on_query_done)
        dataset.bind(QUERY_FAIL, on_fail)

    def bind_view(self, view: BaseView) -> None:
        view.bind(FLASH, lambda flash: self.notify(flash))
