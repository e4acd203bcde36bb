# medtrack/services/notifications.py
"""
Outbound notification hook.

Delivery (email, push) lives outside this service. The app only calls a
``Notifier``; the default one writes a log line. Deployments that deliver
messages register their own notifier through the ``NOTIFIER`` config key.
"""
from flask import current_app


class Notifier:
    def patient_linked(self, patient, caretaker):
        raise NotImplementedError


class LogNotifier(Notifier):
    def patient_linked(self, patient, caretaker):
        current_app.logger.info(
            f"[notify] patient {patient.id}: caretaker {caretaker.username} is now monitoring your medications"
        )


def get_notifier() -> Notifier:
    return current_app.extensions.get("medtrack.notifier") or LogNotifier()


def dispatch(event, **kwargs):
    if not current_app.config.get("NOTIFICATIONS_ENABLED", True):
        return
    try:
        getattr(get_notifier(), event)(**kwargs)
    except Exception:
        # delivery is best effort and never fails the request that triggered it
        current_app.logger.exception(f"Failed to dispatch {event} notification")
