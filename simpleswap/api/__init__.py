"""HTTP API for a SimpleSwap pool."""
