"""Client side of the buy button.

Mirrors the page script: disable, POST once, then either navigate to the
returned checkout URL or re-enable and show a notice. ``flask checkout`` uses
it to drive a running server from the terminal.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

import requests

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Falha ao redirecionar ao checkout!"


class CheckoutState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    REDIRECTED = "redirected"


class CheckoutInitiator:
    def __init__(
        self,
        endpoint: str,
        navigate: Callable[[str], object],
        notify: Callable[[str], object],
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.endpoint = endpoint
        self.navigate = navigate
        self.notify = notify
        self.session = session or requests.Session()
        self.timeout = timeout
        self.state = CheckoutState.IDLE
        self._lock = threading.Lock()

    @property
    def disabled(self) -> bool:
        return self.state is not CheckoutState.IDLE

    def buy(self, price_id: str) -> bool:
        """Request a checkout session for `price_id`; True if we navigated away."""
        with self._lock:
            if self.disabled:
                return False
            self.state = CheckoutState.PENDING

        try:
            r = self.session.post(self.endpoint, json={"priceId": price_id}, timeout=self.timeout)
            r.raise_for_status()
            checkout_url = r.json()["checkoutUrl"]
            if not isinstance(checkout_url, str) or not checkout_url:
                raise ValueError("checkoutUrl missing from response")
        except (requests.RequestException, ValueError, KeyError, TypeError) as err:
            logger.warning("checkout request failed: %s", err)
            self.state = CheckoutState.IDLE
            self.notify(FAILURE_MESSAGE)
            return False

        self.state = CheckoutState.REDIRECTED
        self.navigate(checkout_url)
        return True
