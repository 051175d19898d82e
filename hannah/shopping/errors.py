"""Exception types raised by the shopping list engine."""

from __future__ import annotations


class ShoppingListError(RuntimeError):
    """Base class for shopping list errors."""


class ClipboardUnavailable(ShoppingListError):
    """No usable system clipboard, or writing to it failed."""


class MailClientUnavailable(ShoppingListError):
    """The platform mail composer could not be opened."""


class BoardLookupError(ShoppingListError, KeyError):
    """A day, meal, module or recipe was not found on the board."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class UnknownActionError(ShoppingListError, ValueError):
    """An assistant action block named an action we do not support."""
