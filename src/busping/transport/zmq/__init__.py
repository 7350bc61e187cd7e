"""ZeroMQ transport: DEALER clients talking to a ROUTER service."""
