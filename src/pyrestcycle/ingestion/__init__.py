"""Ingestion layer.

Helpers that turn raw live-state payloads from a vehicle feed into typed
:class:`pyrestcycle.models.TelemetrySample` records.
"""

__all__: list[str] = []
