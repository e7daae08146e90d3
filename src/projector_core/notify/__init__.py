"""Notification collaborators."""

from projector_core.notify.mailer import EmailNotifier, Notifier, build_message, build_notifier

__all__ = ["EmailNotifier", "Notifier", "build_message", "build_notifier"]
