"""Shared infrastructure: config, exceptions, logging, metrics."""
