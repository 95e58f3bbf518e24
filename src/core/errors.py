"""Errors shared between the core and its adapters."""

from __future__ import annotations


class UpstreamError(Exception):
    """Raised by HTTP adapters when a Bilibili request fails.

    Covers transport failures (timeouts, DNS, refused connections) and
    responses whose status is outside the accepted range. The core converts
    it into an absent result instead of letting it propagate.
    """
