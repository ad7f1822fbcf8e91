"""Unit tests for individual components in isolation.

Coverage:
    - models/: Wire-name decoding and persistence round trips
    - attachments/: Allow-list validation
    - store/: Session lifecycle and persistence
    - gateway/: Error mapping with httpx.MockTransport
    - chat/: Submission guard, ordering, and failure handling
    - reveal/: Prefix sequences, cancellation, and line formatting
    - ui/: Session list presentation

Uses mocks for the gateway when needed.
"""
