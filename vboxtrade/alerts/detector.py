"""Threshold crossing detection."""

from typing import Optional

from vboxtrade.models import Alert, AlertDirection


def detect(alert: Alert, previous_price: Optional[float], current_price: float) -> bool:
    """Check whether price crossed the alert threshold since the last tick.

    A crossing needs a baseline: the first observation of an instrument
    never fires. Holding steady past the threshold is not a crossing.

    Args:
        alert: Alert whose target and direction apply.
        previous_price: Last observed price, or None if there is none yet.
        current_price: Price from the current snapshot.

    Returns:
        True if the threshold was crossed in the alert's direction.
    """
    if previous_price is None:
        return False

    target = alert.target_price
    if alert.direction == AlertDirection.BELOW:
        return current_price <= target and previous_price > target
    if alert.direction == AlertDirection.ABOVE:
        return current_price >= target and previous_price < target
    return False
