"""
Test Fixtures and Utilities

Stand-ins for requests.Response and OAuth1Session used by the API,
handshake and integration tests.
"""
