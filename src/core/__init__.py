"""Core domain package for bilirelay.

Core contains link extraction, identifier resolution, command handling and
event routing without any OneBot, HTTP client or filesystem specifics,
keeping the relay logic portable and easy to test.
"""
