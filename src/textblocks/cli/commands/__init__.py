"""Top-level textblocks commands."""
