from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from flask import flash

from ..core.enums import ToastVariant


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: ToastVariant = ToastVariant.SUCCESS


@dataclass(frozen=True)
class ConfirmPrompt:
    """Destructive-action confirmation shown before a delete."""

    record_id: int
    label: str
    title: str = "Are you sure?"
    confirm_text: str = "Yes, delete it!"
    cancel_text: str = "Cancel"

    @property
    def text(self) -> str:
        return f'You are about to delete "{self.label}". This action cannot be undone!'


@dataclass(frozen=True)
class Acknowledgement:
    title: str
    text: str
    icon: str


class Notifier(Protocol):
    def notify(self, toast: Toast) -> None:
        raise NotImplementedError


class CollectingNotifier:
    """Keeps toasts in memory; the page decides how to display them."""

    def __init__(self):
        self.toasts: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        self.toasts.append(toast)


class FlashNotifier:
    """Forward toasts to Flask's message flashing."""

    def notify(self, toast: Toast) -> None:
        flash(toast.description, toast.variant.value)
