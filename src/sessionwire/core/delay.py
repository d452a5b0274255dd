# SessionWire — Minimum interval between request starts
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import time
from typing import Optional


logger = logging.getLogger(__name__)


class DelayGate:
	"""Pacing using monotonic timestamps.

	Call enforce() right before each request. Unconfigured gates never sleep,
	and the first request after configure() is never delayed.
	"""

	def __init__(self) -> None:
		self.min_interval: Optional[float] = None
		self._last: Optional[float] = None

	def configure(self, min_interval: float) -> None:
		self.min_interval = max(0.0, float(min_interval))
		self._last = None

	def enforce(self) -> float:
		"""Block for whatever is left of the interval; returns seconds slept."""
		if self.min_interval is None:
			return 0.0
		slept = 0.0
		if self._last is not None:
			remaining = self.min_interval - (time.monotonic() - self._last)
			if remaining > 0:
				logger.debug("Delaying request by %.6fs", remaining)
				time.sleep(remaining)
				slept = remaining
		self._last = time.monotonic()
		return slept
