"""Shared building blocks: models, capabilities, provider interface, errors, logging."""
