"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - storage: Plain dict standing in for durable browser storage
    - store: Initialized SessionStore over that storage
    - fake_service: FastAPI app imitating the remote analysis service
    - gateway: AnalysisGateway wired to the fake service via ASGITransport
    - controller: ChatController over the store and gateway
"""

import asyncio
from typing import Any

import pytest
from fastapi import FastAPI, Form, HTTPException, UploadFile
from httpx import ASGITransport
from pydantic import BaseModel

from verdict.chat.controller import ChatController
from verdict.gateway.client import AnalysisGateway
from verdict.store.session_store import SessionStore

ANALYSIS_WIRE = {
    "Predicted_Sentiment": "joy",
    "cd": 91,
    "emotions": [
        {"emotion": "joy", "prob": 91},
        {"emotion": "neutral", "prob": 9},
    ],
}
SUMMARY_WIRE = {"summary": "Key Points:\n- Revenue up\n- Costs down"}


class _TextRequest(BaseModel):
    text: str


def create_fake_service() -> FastAPI:
    """Build a stand-in for the remote analysis service.

    ``state.fail_status`` forces an error status, ``state.gate`` holds
    every response until the event is set, ``state.requests`` records calls.
    """
    service = FastAPI()
    service.state.fail_status = None
    service.state.gate = None
    service.state.requests = []

    async def respond(payload: dict[str, Any]) -> dict[str, Any]:
        if service.state.gate is not None:
            await service.state.gate.wait()
        if service.state.fail_status is not None:
            raise HTTPException(status_code=service.state.fail_status, detail="Model offline")
        return payload

    @service.post("/api/analyze_sms")
    async def analyze_sms(body: _TextRequest) -> dict[str, Any]:
        service.state.requests.append(("analyze_sms", body.text))
        return await respond(ANALYSIS_WIRE)

    @service.post("/api/analyze_document")
    async def analyze_document(file: UploadFile) -> dict[str, Any]:
        service.state.requests.append(("analyze_document", file.filename))
        return await respond(ANALYSIS_WIRE)

    @service.post("/api/summarize_document")
    async def summarize_document(
        file: UploadFile, question: str = Form(...)
    ) -> dict[str, Any]:
        service.state.requests.append(("summarize_document", file.filename, question))
        return await respond(SUMMARY_WIRE)

    return service


@pytest.fixture
def storage() -> dict[str, Any]:
    """Return empty durable storage."""
    return {}


@pytest.fixture
def store(storage: dict[str, Any]) -> SessionStore:
    """Return an initialized session store over the storage fixture."""
    session_store = SessionStore(storage)
    session_store.init()
    return session_store


@pytest.fixture
def fake_service() -> FastAPI:
    """Return a fresh fake analysis service."""
    return create_fake_service()


@pytest.fixture
def gateway(fake_service: FastAPI) -> AnalysisGateway:
    """Return a gateway that talks to the fake service in-process."""
    return AnalysisGateway(
        base_url="http://analysis.test",
        question="Summarize this document.",
        transport=ASGITransport(app=fake_service),
    )


@pytest.fixture
def controller(store: SessionStore, gateway: AnalysisGateway) -> ChatController:
    """Return a controller over the store and fake-service gateway."""
    return ChatController(store, gateway)


@pytest.fixture
def gate(fake_service: FastAPI) -> asyncio.Event:
    """Hold fake service responses until the returned event is set."""
    event = asyncio.Event()
    fake_service.state.gate = event
    return event
