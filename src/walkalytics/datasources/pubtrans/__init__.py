"""Walkalytics public transport API (Switzerland).

Public API:
  - nearby: pubtrans_ch_nearby, get_stops
"""

from walkalytics.datasources.pubtrans.nearby import get_stops, pubtrans_ch_nearby

__all__ = ["get_stops", "pubtrans_ch_nearby"]
