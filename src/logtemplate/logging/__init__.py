"""Logging integration for logtemplate: base logger setup, adapters and sinks."""
