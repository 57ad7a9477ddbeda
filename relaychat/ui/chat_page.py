"""NiceGUI chat interface bound to a ConversationController."""

from functools import partial

from nicegui import context, ui

from relaychat.client.factory import create_chat_client
from relaychat.main import configure_logging
from relaychat.ui.controller import ConversationController, Phase

PREVIEW_LENGTH = 30

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .sidebar { background: #f0f4f9; min-width: 240px; }

    .recent-entry {
        border-radius: 50px;
        cursor: pointer;
        color: #282828;
    }
    .recent-entry:hover { background: #e2e6eb; }

    .greet {
        background: linear-gradient(16deg, #4b90ff, #ff5546);
        -webkit-background-clip: text;
        color: transparent;
    }

    .result-box {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
    }

    .input-box {
        background: #f0f4f9;
        border-radius: 50px;
    }

    .result-box b { font-weight: 600; }
</style>
"""


def preview(prompt: str, limit: int = PREVIEW_LENGTH) -> str:
    """Shorten a prompt for the sidebar."""
    return prompt[:limit] + ("..." if len(prompt) > limit else "")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    client = create_chat_client()
    controller = ConversationController(client)
    context.client.on_disconnect(client.aclose)

    async def send_message() -> None:
        if controller.loading:
            return
        await controller.send()

    async def replay(prompt: str) -> None:
        if controller.loading:
            return
        await controller.send(prompt)

    @ui.refreshable
    def recent_prompts() -> None:
        if not controller.history:
            with ui.row().classes("recent-entry px-3 py-2 items-center gap-2"):
                ui.icon("chat_bubble_outline").classes("text-gray-500")
                ui.label("No history").classes("text-sm")
            return
        for prompt in controller.history:
            with (
                ui.row()
                .classes("recent-entry px-3 py-2 items-center gap-2 no-wrap")
                .on("click", partial(replay, prompt))
            ):
                ui.icon("chat_bubble_outline").classes("text-gray-500")
                ui.label(preview(prompt)).classes("text-sm")

    # === UI Layout ===
    with ui.row().classes("w-full min-h-screen no-wrap gap-0"):
        # Sidebar
        with ui.column().classes("sidebar p-4 gap-2 min-h-screen"):
            ui.button("New chat", icon="add", on_click=controller.new_chat).props(
                "flat rounded no-caps"
            )
            ui.label("Recent").classes("text-sm font-medium text-gray-600 mt-4")
            recent_prompts()

        # Main area
        with ui.column().classes("flex-grow items-center p-4 md:p-8 gap-4"):
            ui.label("Gemini").classes("self-start text-xl text-gray-600")

            with ui.column().classes("w-full max-w-3xl gap-4 flex-grow") as greeting:
                ui.label("Hello, Dev.").classes("greet text-5xl font-medium")
                ui.label("How can I help you today?").classes("text-4xl text-gray-300")

            with ui.column().classes("w-full max-w-3xl gap-3 flex-grow") as result:
                with ui.row().classes("items-center gap-3"):
                    ui.icon("person").classes("text-2xl text-gray-500")
                    prompt_label = ui.label("").classes("text-base")
                with ui.row().classes("w-full items-start gap-3 no-wrap"):
                    ui.icon("auto_awesome").classes("text-2xl text-blue-500")
                    with ui.column().classes("flex-grow result-box px-4 py-3"):
                        spinner = ui.spinner("dots", size="lg")
                        response_html = ui.html("", sanitize=False).classes(
                            "text-sm leading-relaxed"
                        )

            with ui.row().classes("w-full max-w-3xl input-box px-4 py-2 items-center no-wrap"):
                input_field = (
                    ui.input(placeholder="Enter a prompt here")
                    .props("borderless dense")
                    .classes("flex-grow")
                    .bind_value(controller, "input_text")
                    .on("keydown.enter", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props("flat round")

    def render() -> None:
        greeting.set_visibility(not controller.show_result)
        result.set_visibility(controller.show_result)
        prompt_label.set_text(controller.recent_prompt)
        spinner.set_visibility(controller.loading and controller.phase == Phase.SENDING)
        response_html.set_content(controller.display_html)
        if controller.loading:
            send_btn.disable()
            input_field.disable()
        else:
            send_btn.enable()
            input_field.enable()
        recent_prompts.refresh()

    controller.subscribe(render)
    render()


def main() -> None:
    configure_logging()
    ui.run(title="Gemini Chat", port=8080, reload=False)


if __name__ == "__main__":
    main()
