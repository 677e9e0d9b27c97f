"""Core package: settings, security, exceptions, pagination and response envelopes."""
