"""Core package of hexcrypt: engine facade and error types."""
