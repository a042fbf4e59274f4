"""Shared infrastructure: settings, logging, store sessions and probes."""
