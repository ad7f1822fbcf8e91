"""NiceGUI chat interface with session sidebar and progressive reveal."""

from functools import cache

from nicegui import app, events, ui

from verdict.attachments.validator import ACCEPT_ATTRIBUTE, CandidateFile
from verdict.chat.controller import ChatController, Draft, InputValidationError
from verdict.config import AppConfig, get_config
from verdict.gateway.client import AnalysisGateway
from verdict.models.schemas import (
    AnalysisResult,
    AssistantMessage,
    DocumentAction,
    ErrorPayload,
    Session,
    SummaryResult,
    UserMessage,
)
from verdict.reveal.formatter import IncrementalFormatter, format_text, to_html
from verdict.reveal.renderer import RevealRenderer
from verdict.store.session_store import SessionStore, StoreRegistry
from verdict.ui.presenter import count_label, list_entries

EXAMPLE_PROMPTS = (
    "I'm so excited about this new project!",
    "This is really frustrating and disappointing.",
)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .sidebar { background: #1f2937; color: #e5e7eb; }
    .chat-item { border-radius: 8px; cursor: pointer; }
    .chat-item:hover { background: #374151; }
    .chat-item.active { background: #4b5563; }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .emotion-card {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 8px;
    }
    .emotion-card.primary { border-color: #667eea; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
    }
    .input-box:focus-within { border-color: #667eea; }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }

    .message-assistant strong { font-weight: 600; }
</style>
"""


def _time_label(message: UserMessage | AssistantMessage) -> str:
    return message.created_at.astimezone().strftime("%I:%M %p")


@cache
def _registry(storage_key: str) -> StoreRegistry:
    return StoreRegistry(storage_key)


_controllers: dict[str, ChatController] = {}


def _browser_chat(config: AppConfig) -> tuple[SessionStore, ChatController]:
    """Return the store and controller shared by every page of this browser."""
    browser_id = app.storage.browser["id"]
    store = _registry(config.storage_key).get(browser_id, app.storage.user)
    controller = _controllers.get(browser_id)
    if controller is None:
        controller = ChatController(store, AnalysisGateway.from_config(config))
        _controllers[browser_id] = controller
    return store, controller


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    config: AppConfig = get_config()
    store, controller = _browser_chat(config)
    renderer = RevealRenderer(config.reveal_interval)
    draft = Draft()
    user = app.storage.user.get("user")

    # Reveal targets are re-bound whenever the message list is rebuilt
    reveal_targets: dict[str, ui.html] = {}
    revealed: set[str] = set()
    formatter = IncrementalFormatter()

    input_field: ui.textarea
    send_btn: ui.button
    summarize_btn: ui.button

    def on_reveal_frame(message_id: str, prefix: str) -> None:
        target = reveal_targets.get(message_id)
        if target is not None:
            target.set_content(to_html(formatter.feed(prefix)))

    def render_summary(message: AssistantMessage, result: SummaryResult) -> None:
        label = ui.html("", sanitize=False).classes("text-sm leading-relaxed")
        reveal_targets[message.id] = label

        if message.animate and message.id not in revealed:
            revealed.add(message.id)
            formatter.reset()
            renderer.start(
                message.id,
                result.summary_text,
                lambda prefix: on_reveal_frame(message.id, prefix),
            )
        elif renderer.active_id == message.id and renderer.state is not None:
            label.set_content(to_html(format_text(renderer.state.text)))
        else:
            label.set_content(to_html(format_text(result.summary_text)))

    def render_analysis(result: AnalysisResult) -> None:
        ui.label("🎯 Primary Emotion").classes("text-sm font-semibold")
        with ui.row().classes("emotion-card primary px-3 py-2 justify-between w-full"):
            ui.label(result.predicted_label).classes("font-semibold")
            ui.label(f"{result.confidence_percent:g}%")
        if result.distribution:
            ui.label("📊 All Detected Emotions").classes("text-xs font-semibold mt-2")
            with ui.grid(columns=2).classes("gap-2 w-full"):
                for entry in result.distribution:
                    with ui.row().classes("emotion-card px-3 py-1 justify-between"):
                        ui.label(entry.label).classes("text-sm")
                        ui.label(f"{entry.probability_percent:g}%").classes("text-sm")

    def render_message(message: UserMessage | AssistantMessage) -> None:
        is_user = message.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    match message:
                        case UserMessage(attachment=attachment, content=content):
                            if attachment:
                                with ui.row().classes("items-center gap-1 text-xs"):
                                    ui.icon("description")
                                    ui.label(attachment.name)
                            if content:
                                ui.label(content).classes("text-sm whitespace-pre-wrap")
                        case AssistantMessage(payload=AnalysisResult() as result):
                            render_analysis(result)
                        case AssistantMessage(payload=SummaryResult() as result):
                            render_summary(message, result)
                        case AssistantMessage(payload=ErrorPayload(message=error)):
                            ui.label(f"❌ {error}").classes("text-sm text-red-700")
                ui.label(_time_label(message)).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def render_status_indicator(status_text: str) -> None:
        with ui.row().classes("w-full justify-start"):
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label(status_text).classes("text-sm text-gray-500 italic")

    def use_example(prompt: str) -> None:
        draft.text = prompt
        input_field.value = prompt
        sync_controls()

    def render_empty_chat() -> None:
        with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
            ui.icon("forum").classes("text-5xl text-gray-300")
            ui.label("Start a conversation").classes("text-lg text-gray-500")
            ui.label(
                "Send a message or upload a document to analyze its sentiment"
            ).classes("text-sm text-gray-400")
            for prompt in EXAMPLE_PROMPTS:
                ui.button(
                    f'"{prompt}"', on_click=lambda p=prompt: use_example(p)
                ).props("flat no-caps")

    @ui.refreshable
    def sidebar() -> None:
        for entry in list_entries(store):
            row_classes = "chat-item w-full px-3 py-2 items-center justify-between"
            if entry.active:
                row_classes += " active"
            with ui.row().classes(row_classes).on(
                "click", lambda _, sid=entry.id: select_chat(sid)
            ):
                with ui.column().classes("gap-0 flex-grow"):
                    ui.label(entry.title).classes("text-sm truncate")
                    ui.label(f"{entry.date_label} · {entry.count_label}").classes(
                        "text-[10px] text-gray-400"
                    )
                ui.button(icon="delete").props("flat round dense size=sm color=grey").on(
                    "click.stop", lambda _, sid=entry.id: delete_chat(sid)
                )
        if not store.sessions:
            ui.label("No chats yet").classes("text-sm text-gray-400 p-3")

    @ui.refreshable
    def conversation() -> None:
        reveal_targets.clear()
        session: Session | None = store.current
        if session is None:
            with ui.column().classes("w-full h-full items-center justify-center gap-3"):
                ui.label(f"Welcome to {config.app_name}").classes("text-2xl font-semibold")
                ui.label(config.tagline).classes("text-gray-500")
                ui.button("Start New Chat", on_click=new_chat).classes("send-btn text-white")
            return

        with ui.row().classes("w-full px-5 py-3 border-b items-center justify-between"):
            ui.label(session.title).classes("text-lg font-semibold")
            ui.label(count_label(len(session.messages))).classes("text-xs text-gray-400")

        with ui.scroll_area().classes("flex-grow w-full bg-gray-50"):
            with ui.column().classes("w-full p-5 gap-4"):
                if not session.messages:
                    render_empty_chat()
                for message in session.messages:
                    render_message(message)
                if status := controller.progress_text(session.id):
                    render_status_indicator(status)

    @ui.refreshable
    def attachment_preview() -> None:
        if draft.attachment is not None:
            with ui.row().classes("items-center gap-2 px-3 py-1 bg-gray-100 rounded-lg"):
                ui.icon("description").classes("text-gray-500")
                ui.label(draft.attachment.name).classes("text-sm")
                ui.button(icon="close", on_click=remove_attachment).props(
                    "flat round dense size=sm"
                )
        if draft.error:
            ui.label(draft.error).classes("text-sm text-red-600")

    def is_busy() -> bool:
        session_id = store.current_id
        return session_id is not None and controller.is_submitting(session_id)

    def sync_controls() -> None:
        busy = is_busy()
        if input_field.value != draft.text:
            input_field.value = draft.text
        input_field.set_enabled(not busy)
        send_btn.set_enabled(draft.can_submit and not busy)
        summarize_btn.set_enabled(draft.attachment is not None and not busy)
        attachment_preview.refresh()

    def refresh_all() -> None:
        sidebar.refresh()
        conversation.refresh()
        sync_controls()

    def select_chat(session_id: str) -> None:
        renderer.cancel()
        store.select(session_id)

    def delete_chat(session_id: str) -> None:
        if session_id == store.current_id:
            renderer.cancel()
        store.delete_session(session_id)

    def new_chat() -> None:
        renderer.cancel()
        store.create_session()

    def remove_attachment() -> None:
        draft.remove_attachment()
        sync_controls()

    def on_text_change(e: events.ValueChangeEventArguments) -> None:
        draft.text = e.value or ""
        send_btn.set_enabled(draft.can_submit and not is_busy())

    async def handle_upload(e: events.UploadEventArguments) -> None:
        candidate = CandidateFile(
            name=e.file.name,
            content_type=e.file.content_type,
            content=await e.file.read(),
        )
        if not draft.pick(candidate):
            ui.notify(draft.error, type="warning")
        e.sender.reset()
        sync_controls()

    async def send(action: DocumentAction | None = None) -> None:
        session_id = store.current_id
        if session_id is None:
            session_id = store.create_session()
        try:
            await controller.submit(session_id, draft, action)
        except InputValidationError as e:
            draft.error = e.message
            sync_controls()

    # === UI Layout ===
    with ui.row().classes("w-full header px-5 py-3 items-center"):
        ui.icon("insights").classes("text-white text-3xl")
        ui.label(config.app_name).classes("text-lg font-semibold text-white")

    with ui.row().classes("w-full no-wrap gap-0").style("height: calc(100vh - 4rem)"):
        with ui.column().classes("sidebar w-64 h-full p-3 gap-2"):
            ui.button("New Chat", icon="add", on_click=new_chat).props(
                "outline color=white no-caps"
            ).classes("w-full")
            with ui.scroll_area().classes("flex-grow w-full"):
                sidebar()
            with ui.row().classes("items-center gap-2 text-sm text-gray-300"):
                ui.icon("person")
                ui.label(str(user) if user else config.app_name)

        with ui.column().classes("flex-grow h-full gap-0 bg-white"):
            with ui.column().classes("w-full flex-grow gap-0"):
                conversation()

            with ui.column().classes("w-full p-4 gap-2 border-t"):
                attachment_preview()
                with ui.row().classes("w-full gap-3 items-end no-wrap"):
                    ui.upload(
                        on_upload=handle_upload, auto_upload=True, max_files=1
                    ).props(f'accept="{ACCEPT_ATTRIBUTE}" flat dense').classes("w-48")
                    with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                        input_field = (
                            ui.textarea(
                                placeholder="Type your message or upload a document...",
                                on_change=on_text_change,
                            )
                            .props("autogrow borderless dense rows=1")
                            .classes("w-full")
                            .on("keydown.enter.prevent", lambda: send())
                        )
                    summarize_btn = ui.button(
                        "Summarize",
                        on_click=lambda: send(DocumentAction.SUMMARIZE),
                    ).props("outline no-caps")
                    send_btn = (
                        ui.button(icon="send", on_click=lambda: send())
                        .props("round unelevated")
                        .classes("send-btn")
                    )

    unsubscribe = store.subscribe(refresh_all)
    sync_controls()

    def on_disconnect() -> None:
        unsubscribe()
        renderer.cancel()

    ui.context.client.on_disconnect(on_disconnect)
