"""
Deliver monitor events to a Discord-compatible webhook.

Delivery is best effort: any failure is logged and dropped, never retried and
never raised to the caller. Without a webhook URL the notifier only logs.
"""
from __future__ import annotations

import asyncio

import aiohttp

from logging_setup import get_logger
from models import MonitorEvent
from pipeline.formatter import build_payload, format_event

_log = get_logger("pipeline.notifier")


class WebhookNotifier:
    """POSTs one webhook message per event."""

    def __init__(self, url: str | None) -> None:
        self._url = url or None

    @property
    def configured(self) -> bool:
        return self._url is not None

    async def notify(self, session: aiohttp.ClientSession, event: MonitorEvent) -> bool:
        """Send *event*. Returns True on a 2xx response, False otherwise."""
        summary = format_event(event)
        if self._url is None:
            _log.info("webhook_not_configured", kind=event.kind, summary=summary)
            return False

        payload = build_payload(event)
        try:
            async with session.post(self._url, json=payload) as resp:
                if 200 <= resp.status < 300:
                    _log.info("webhook_sent", kind=event.kind, summary=summary)
                    return True
                body = await resp.text(errors="replace")
                _log.warning(
                    "webhook_non_2xx_response",
                    status_code=resp.status,
                    body=body[:200],
                    kind=event.kind,
                )
                return False
        except asyncio.TimeoutError:
            _log.warning("webhook_request_timeout", kind=event.kind)
            return False
        except aiohttp.ClientError as exc:
            _log.warning("webhook_http_error", error=str(exc), kind=event.kind)
            return False
        except Exception as exc:
            # a failed delivery must never abort the cycle that triggered it
            _log.warning("webhook_delivery_failed", error=repr(exc), kind=event.kind)
            return False
