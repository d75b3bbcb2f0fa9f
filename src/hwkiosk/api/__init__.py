"""HTTP boundary between the kiosk panel and the diagnostics core."""
