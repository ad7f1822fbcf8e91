"""Verdict AI - conversational front-end for sentiment analysis and summarization.

Combines NiceGUI for the chat timeline, httpx for the remote analysis API,
and Pydantic for data validation and persistence.

Components:
    - attachments: file validation for document actions
    - store: persistent, append-only chat sessions
    - chat: per-message request/response orchestration
    - gateway: client for the remote analysis service
    - reveal: progressive disclosure of long-form results
    - ui: chat page and session list presentation
    - models: message, session, and result schemas
"""

__version__ = "0.1.0"
