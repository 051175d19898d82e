"""Live shopping list that follows the meal board."""

from __future__ import annotations

import enum
import logging
import threading
from typing import TYPE_CHECKING, Callable, Iterable

from .aggregation.aggregator import AggregatedItem, Categorizer, aggregate
from .aggregation.categories import detect_category
from .aggregation.grouping import GroupedList, group_by_category
from .aggregation.scanner import scan_board
from .board.models import FoodRecord
from .clipboard import Clipboard, open_mail_client
from .export import (
    CLIPBOARD_HEADER,
    EMAIL_FOOTER,
    EMAIL_HEADER,
    EMAIL_SUBJECT,
    clipboard_text,
    email_body,
    mailto_url,
)
from .scheduler import DelayedTask, Debouncer, TaskScheduler

if TYPE_CHECKING:
    from .board.models import Board
    from .board.signals import ChangeSignal
    from .config import ShoppingConfig

logger = logging.getLogger(__name__)

RecordSource = Callable[[], Iterable[FoodRecord]]
RenderListener = Callable[[GroupedList], None]


class EngineState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    ATTACHED = "attached"
    DEBOUNCING = "debouncing"
    SCANNING = "scanning"
    RENDERED = "rendered"
    DETACHED = "detached"


class ShoppingList:
    """Aggregated, categorized shopping list kept in step with a board.

    Records are pulled from ``source`` and the list is rebuilt from
    scratch on every pass. Change notifications from ``signal`` are
    debounced so a burst of edits produces a single pass once the board
    has been quiet for ``debounce_seconds``. The copy and email actions
    read the last computed list and never trigger a rescan.
    """

    def __init__(
        self,
        source: RecordSource,
        signal: ChangeSignal | None = None,
        *,
        scheduler: TaskScheduler,
        debounce_seconds: float = 0.3,
        copy_feedback_seconds: float = 2.0,
        cta_threshold: int = 5,
        categorizer: Categorizer = detect_category,
        email_subject: str = EMAIL_SUBJECT,
        email_footer: str = EMAIL_FOOTER,
    ) -> None:
        self._source = source
        self._signal = signal
        self._scheduler = scheduler
        self._categorizer = categorizer
        self._copy_feedback_seconds = copy_feedback_seconds
        self._cta_threshold = cta_threshold
        self._email_subject = email_subject
        self._email_footer = email_footer

        self._debouncer = Debouncer(scheduler, debounce_seconds, self._debounced_refresh)
        self._state = EngineState.UNINITIALIZED
        self._subscribed = False
        self._items: dict[str, AggregatedItem] = {}
        self._grouped = GroupedList()
        self._listeners: list[RenderListener] = []
        self._refresh_lock = threading.Lock()
        self._pass_count = 0
        self._cta_shown = False
        self._copy_confirmed = False
        self._copy_reset: DelayedTask | None = None

    @classmethod
    def for_board(
        cls,
        board: Board | None,
        *,
        scheduler: TaskScheduler,
        config: ShoppingConfig | None = None,
        **kwargs,
    ) -> ShoppingList:
        """Build a list that scans ``board`` and listens to its change signal.

        Settings from ``config`` are used unless overridden by ``kwargs``.
        An absent board yields a list that never attaches.
        """
        if config is not None:
            kwargs.setdefault("debounce_seconds", config.shopping.debounce_seconds)
            kwargs.setdefault(
                "copy_feedback_seconds", config.shopping.copy_feedback_seconds
            )
            kwargs.setdefault("cta_threshold", config.shopping.cta_threshold)
            kwargs.setdefault("categorizer", config.categories.categorizer())
            kwargs.setdefault("email_subject", config.email.subject)
            kwargs.setdefault("email_footer", config.email.footer)
        signal = board.changed if board is not None else None
        return cls(lambda: scan_board(board), signal, scheduler=scheduler, **kwargs)

    # -- lifecycle ----------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def pass_count(self) -> int:
        """Number of completed scan passes."""
        return self._pass_count

    def attach(self) -> bool:
        """Start following the board and compute the initial list.

        Returns:
            False if there is no change signal to follow. The list then
            stays idle until a new instance is created.
        """
        if self._state is EngineState.DETACHED:
            return False
        if self._subscribed:
            return True
        if self._signal is None:
            logger.info("No board to observe; shopping list stays idle")
            return False

        self._signal.subscribe(self._on_change)
        self._subscribed = True
        self._state = EngineState.ATTACHED
        logger.debug("Shopping list attached to board")
        self.refresh()
        return True

    def detach(self) -> None:
        """Stop following the board and drop any pending refresh."""
        if self._subscribed:
            self._signal.unsubscribe(self._on_change)
            self._subscribed = False
        self._debouncer.cancel()
        if self._copy_reset is not None:
            self._copy_reset.cancel()
            self._copy_reset = None
        self._state = EngineState.DETACHED
        logger.debug("Shopping list detached")

    def _on_change(self) -> None:
        if not self._subscribed:
            return
        self._state = EngineState.DEBOUNCING
        self._debouncer.trigger()

    def _debounced_refresh(self) -> None:
        if self._state is EngineState.DETACHED:
            return
        try:
            self.refresh()
        except Exception:
            logger.exception("Shopping list refresh failed")

    # -- aggregation --------------------------------------------------

    def refresh(self) -> GroupedList:
        """Scan, aggregate and group synchronously, then notify listeners."""
        with self._refresh_lock:
            previous = self._state
            self._state = EngineState.SCANNING
            try:
                items = aggregate(self._source(), categorizer=self._categorizer)
                grouped = group_by_category(items.values())
            except Exception:
                self._state = previous
                raise
            self._items = items
            self._grouped = grouped
            self._pass_count += 1
            if len(items) >= self._cta_threshold:
                self._cta_shown = True
            if self._state is EngineState.SCANNING:
                self._state = EngineState.RENDERED
            logger.debug(
                "Shopping list pass %d: %d items in %d categories",
                self._pass_count,
                grouped.item_count,
                len(grouped),
            )

        for listener in list(self._listeners):
            try:
                listener(grouped)
            except Exception:
                logger.exception("Shopping list listener %r failed", listener)
        return grouped

    def add_listener(self, listener: RenderListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: RenderListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_grouped_list(self) -> GroupedList:
        return self._grouped

    @property
    def items(self) -> list[AggregatedItem]:
        return list(self._items.values())

    @property
    def is_empty(self) -> bool:
        return self._grouped.is_empty

    @property
    def show_cta(self) -> bool:
        """Whether the "save this list?" prompt has been earned."""
        return self._cta_shown

    # -- presentation sinks -------------------------------------------

    def copy_to_clipboard_text(self) -> str:
        return clipboard_text(self._grouped, header=CLIPBOARD_HEADER)

    def email_body_text(self) -> str:
        return email_body(self._grouped, header=EMAIL_HEADER, footer=self._email_footer)

    def mailto_url(self) -> str:
        return mailto_url(
            self._grouped,
            subject=self._email_subject,
            header=EMAIL_HEADER,
            footer=self._email_footer,
        )

    @property
    def copy_confirmed(self) -> bool:
        """True for a short while after a successful copy."""
        return self._copy_confirmed

    def copy_to_clipboard(self, copier: Callable[[str], None] | None = None) -> str:
        """Copy the current list to the clipboard.

        Raises:
            ClipboardUnavailable: If the clipboard cannot be written.
        """
        text = self.copy_to_clipboard_text()
        (copier or Clipboard.copy)(text)
        self._copy_confirmed = True
        if self._copy_reset is not None:
            self._copy_reset.cancel()
        self._copy_reset = self._scheduler.call_later(
            self._copy_feedback_seconds, self._clear_copy_confirmation
        )
        return text

    def _clear_copy_confirmation(self) -> None:
        self._copy_confirmed = False
        self._copy_reset = None

    def email_list(self, opener: Callable[[str], None] | None = None) -> str:
        """Open the mail composer with the current list.

        Raises:
            MailClientUnavailable: If no mail client could be opened.
        """
        url = self.mailto_url()
        (opener or open_mail_client)(url)
        return url
