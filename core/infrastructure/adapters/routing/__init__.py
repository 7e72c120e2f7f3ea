"""Road routing adapters."""
