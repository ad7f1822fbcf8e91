"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Session sidebar with relative dates and message counts
    - Chat timeline with analysis cards and revealed summaries
    - Text input and single-file document picker

Contains minimal business logic. Delegates submissions to the chat
controller and state to the session store.
"""
