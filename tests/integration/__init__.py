"""Integration tests for components working together as a system.

No mocks for core functionality - the real gateway talks to a fake remote
service over httpx.ASGITransport, and results land in a real session store.

Coverage:
    - Text analysis, document analysis, and summarization flows
    - Error statuses surfacing as terminal chat messages
    - Session deletion while a request is in flight
    - Host application health endpoint
"""
