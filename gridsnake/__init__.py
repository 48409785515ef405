"""Single-player grid snake simulation with a WebSocket adapter."""
