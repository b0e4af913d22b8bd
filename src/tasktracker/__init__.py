"""Personal task tracker: JSON task store, HTTP API, console and transcript parser."""
