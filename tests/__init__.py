"""
Test Suite for the Splitwise CLI

Test Structure:
- fixtures/: Fake API responses and OAuth sessions
- unit/: Unit tests mirroring src/ package structure
- integration/: Login flow against a live loopback callback listener

No test talks to the real Splitwise API or opens a browser.
"""
