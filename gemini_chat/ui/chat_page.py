"""NiceGUI chat interface with threads, image attachments and SSE streaming."""

import logging
import os
from functools import partial

from nicegui import app, events, ui

from gemini_chat.agent import HttpStreamTransport, StreamingAccumulator
from gemini_chat.agent.config import DEFAULT_MODEL
from gemini_chat.models import InlineImagePart, Role, TextPart, Turn
from gemini_chat.parsing import ImageParseError, parse_image
from gemini_chat.store import BrowserStorageRepository, ThreadStore
from gemini_chat.ui.markdown import markdown_to_html
from gemini_chat.ui.session import ChatSession

logger = logging.getLogger(__name__)

UI_PORT_DEFAULT = "8080"
MODEL_LABEL = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
FALLBACK_TITLE = "Gemini Chat"

SUGGESTIONS = [
    "Write a story about space",
    "Help me debug my Python code",
    "What are the benefits of type hints?",
    "Explain quantum physics simply",
]

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .sidebar { background: #111827; color: #e5e7eb; }
    .thread-item { border-radius: 8px; cursor: pointer; color: #9ca3af; }
    .thread-item:hover { background: #1f2937; color: #e5e7eb; }
    .thread-item.active { background: #1f2937; color: #93c5fd; }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

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

    .avatar-user { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .avatar-assistant { background: #6b7280; }

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
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #667eea; }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }

    /* Markdown styling */
    .message-assistant strong, .message-user strong { font-weight: 600; }
    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


def api_base_url() -> str:
    """Base URL of the streaming API; defaults to this host on PORT."""
    return os.getenv("API_BASE_URL", f"http://localhost:{os.getenv('PORT', '8000')}")


def format_time(turn: Turn) -> str:
    return turn.timestamp.astimezone().strftime("%I:%M %p")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    ui.query(".nicegui-content").classes("p-0")

    store = ThreadStore(BrowserStorageRepository(app.storage.user))
    session = ChatSession(store, StreamingAccumulator(HttpStreamTransport(api_base_url())))
    # Live html elements of model turns, patched in place while streaming
    content_views: dict[str, ui.html] = {}

    thread_list: ui.column
    header_label: ui.label
    scroll_area: ui.scroll_area
    messages_container: ui.column
    preview_container: ui.row
    uploader: ui.upload
    input_field: ui.textarea
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_typing_dots() -> None:
        with ui.row().classes("gap-1 py-1").mark("typing"):
            for _ in range(3):
                ui.element("div").classes("typing-dot")

    def render_turn(turn: Turn) -> None:
        is_user = turn.role == Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if turn.parts is not None:
                        for part in turn.parts:
                            match part:
                                case InlineImagePart():
                                    ui.image(part.data_url).props("fit=contain").classes(
                                        "w-64 max-h-64 rounded-lg mb-2"
                                    )
                                case TextPart(text=text):
                                    ui.html(markdown_to_html(text), sanitize=False).classes(
                                        "text-sm leading-relaxed"
                                    )
                    elif not turn.content and session.is_streaming:
                        render_typing_dots()
                    else:
                        content_views[turn.id] = ui.html(
                            markdown_to_html(turn.content), sanitize=False
                        ).classes("text-sm leading-relaxed")
                ui.label(format_time(turn)).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_welcome() -> None:
        with ui.column().classes("w-full items-center justify-center gap-3 py-16"):
            ui.icon("smart_toy").classes("text-6xl text-indigo-400")
            ui.label("How can I help you today?").classes("text-2xl font-semibold text-gray-700")
            ui.label(
                f"I'm powered by {MODEL_LABEL}. I can help with coding, writing, "
                "visual analysis, and more."
            ).classes("text-gray-400 text-center max-w-md")
            with ui.grid(columns=2).classes("gap-3 mt-6 w-full max-w-2xl"):
                for suggestion in SUGGESTIONS:
                    ui.button(suggestion, on_click=partial(use_suggestion, suggestion)).props(
                        "flat no-caps align=left"
                    ).classes("bg-white border rounded-xl text-gray-500 p-4")

    def refresh_messages() -> None:
        content_views.clear()
        messages_container.clear()
        thread = store.active_thread()
        with messages_container:
            if thread is None:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a new chat").classes("text-lg text-gray-400")
            elif not thread.messages:
                render_welcome()
            else:
                for turn in thread.messages:
                    render_turn(turn)
        scroll_area.scroll_to(percent=1.0)

    def refresh_threads() -> None:
        thread_list.clear()
        with thread_list:
            for thread in store.threads:
                active = "active" if thread.id == store.active_thread_id else ""
                with (
                    ui.row()
                    .classes(f"thread-item {active} w-full items-center no-wrap px-3 py-2 gap-3")
                    .on("click", partial(select_thread, thread.id))
                ):
                    ui.icon("chat_bubble_outline").classes("text-base")
                    ui.label(thread.title).classes("truncate flex-grow text-sm font-medium")
                    ui.button(icon="delete").props("flat round dense size=sm color=grey").on(
                        "click.stop", partial(delete_thread, thread.id)
                    )
        active_thread = store.active_thread()
        header_label.set_text(active_thread.title if active_thread else FALLBACK_TITLE)

    def render_preview() -> None:
        preview_container.clear()
        image = session.attached_image
        if image is None:
            return
        with preview_container, ui.element("div").classes("relative"):
            ui.image(image.data_url).classes(
                "w-20 h-20 rounded-lg border-2 border-indigo-400"
            ).mark("attachment-preview")
            ui.button(icon="close", on_click=remove_image).props(
                "round dense size=xs color=grey-9"
            ).classes("absolute -top-2 -right-2").mark("remove-attachment")

    def update_send_state() -> None:
        send_btn.set_enabled(session.can_submit(input_field.value or ""))

    def refresh_all() -> None:
        refresh_threads()
        refresh_messages()
        render_preview()
        update_send_state()

    def select_thread(thread_id: str) -> None:
        if session.is_streaming:
            return
        store.select_thread(thread_id)
        refresh_all()

    def delete_thread(thread_id: str) -> None:
        if session.is_streaming:
            return
        store.delete_thread(thread_id)
        refresh_all()

    def new_chat() -> None:
        if session.is_streaming:
            return
        store.create_thread()
        refresh_all()

    def use_suggestion(suggestion: str) -> None:
        input_field.value = suggestion
        update_send_state()

    def remove_image() -> None:
        session.attached_image = None
        render_preview()
        update_send_state()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        try:
            session.attached_image = parse_image(await e.file.read(), e.file.content_type)
        except ImageParseError as err:
            logger.warning(f"Rejected attachment {e.file.name}: {err}")
            ui.notify(str(err), type="warning")
        uploader.reset()
        render_preview()
        update_send_state()

    def on_update(turn_id: str, snapshot: str) -> None:
        view = content_views.get(turn_id)
        if view is None:
            refresh_messages()
        else:
            view.set_content(markdown_to_html(snapshot))
            scroll_area.scroll_to(percent=1.0)

    def on_error(error: str) -> None:
        ui.notify(f"Request failed: {error}", type="negative")

    async def send_message() -> None:
        text = input_field.value or ""
        if not session.can_submit(text):
            return
        input_field.value = ""
        await session.submit(
            text,
            on_started=refresh_all,
            on_update=on_update,
            on_error=on_error,
        )
        refresh_all()

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        # Sidebar
        with ui.column().classes("sidebar w-72 h-full p-4 gap-3 shrink-0"):
            ui.button("New Chat", icon="add", on_click=new_chat).props("unelevated no-caps").classes(
                "w-full send-btn text-white"
            )
            with ui.scroll_area().classes("flex-grow w-full"):
                thread_list = ui.column().classes("w-full gap-1")
            with ui.row().classes("w-full items-center gap-3 px-2 pt-3 border-t border-gray-700"):
                with ui.element("div").classes(
                    "w-8 h-8 rounded-full bg-gray-700 flex items-center justify-center"
                ):
                    ui.icon("person").classes("text-gray-300")
                with ui.column().classes("gap-0"):
                    ui.label("Free Tier").classes("text-xs font-semibold text-gray-300")
                    ui.label(MODEL_LABEL).classes("text-[10px] text-gray-500")

        # Main chat area
        with ui.column().classes("flex-grow h-full gap-0 bg-white"):
            # Header
            with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
                with ui.row().classes("items-center gap-3"):
                    ui.icon("smart_toy").classes("text-white text-3xl")
                    header_label = ui.label(FALLBACK_TITLE).classes(
                        "text-lg font-semibold text-white"
                    )
                with ui.element("div").classes("bg-white/20 rounded px-2 py-1"):
                    ui.label("Live").classes("text-[10px] font-bold text-white uppercase")

            # Messages
            with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
                messages_container = ui.column().classes("w-full gap-4 p-5")

            # Input
            with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
                preview_container = ui.row().classes("gap-2")
                with ui.row().classes("w-full gap-3 items-end no-wrap"):
                    uploader = (
                        ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                        .props('accept="image/*"')
                        .classes("hidden")
                        .mark("uploader")
                    )
                    ui.button(icon="image", on_click=lambda: uploader.run_method("pickFiles")).props(
                        "flat round color=grey-7"
                    )
                    with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                        input_field = (
                            ui.textarea(
                                placeholder="Message Gemini...",
                                on_change=lambda _: update_send_state(),
                            )
                            .props("autogrow borderless dense rows=1")
                            .classes("w-full")
                            .mark("composer")
                            .on("keydown.enter.exact.prevent", send_message)
                        )
                    send_btn = (
                        ui.button(icon="send", on_click=send_message)
                        .props("round unelevated")
                        .classes("send-btn")
                        .mark("send")
                    )
                ui.label(
                    "Gemini may display inaccurate info, including about people, "
                    "so double-check its responses."
                ).classes("w-full text-center text-[10px] text-gray-400")

    refresh_all()


def main() -> None:
    ui.run(
        title="Gemini Chat",
        port=int(os.getenv("UI_PORT", UI_PORT_DEFAULT)),
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "gemini-chat-secret"),
    )


if __name__ == "__main__":
    main()
