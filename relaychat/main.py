"""Command-line entry point.

Two layouts are supported, picked with RUN_MODE:

- integrated (default): one uvicorn server hosts the relay routes and the
  NiceGUI page.
- separate: the relay and the UI run as two processes; the UI talks to the
  relay over HTTP at API_BASE_URL.
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_integrated() -> None:
    """Serve the relay and the chat page from a single process."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    # The page's relay client must reach the port served here
    os.environ.setdefault("API_BASE_URL", f"http://localhost:{port}")

    import uvicorn
    from nicegui import ui

    from relaychat.api.app import create_app
    from relaychat.ui.chat_page import chat_page  # noqa: F401 - registers "/"

    app = create_app()
    ui.run_with(
        app,
        title="Gemini Chat",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "relaychat-secret"),
    )

    logger.info(f"Relay and chat UI on http://localhost:{port} (docs at /docs)")

    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


async def _supervise(*commands: list[str], env: dict[str, str]) -> None:
    """Run child processes until the first one exits, then stop the rest."""
    procs = [await asyncio.create_subprocess_exec(*cmd, env=env) for cmd in commands]
    waiters = [asyncio.create_task(proc.wait()) for proc in procs]
    try:
        await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for proc in procs:
            if proc.returncode is None:
                proc.terminate()
        await asyncio.gather(*waiters)


def run_separate() -> None:
    """Run the relay (PORT, default 8000) and the UI (port 8080) as two processes."""
    host = os.getenv("HOST", "0.0.0.0")
    port = os.getenv("PORT", "8000")
    env = {**os.environ, "API_BASE_URL": os.getenv("API_BASE_URL", f"http://localhost:{port}")}

    relay_cmd = [
        sys.executable, "-m", "uvicorn", "relaychat.api.app:create_app",
        "--factory", "--host", host, "--port", port,
    ]
    ui_cmd = [sys.executable, "-m", "relaychat.ui.chat_page"]

    logger.info(f"Relay on http://localhost:{port}, chat UI on http://localhost:8080")
    try:
        asyncio.run(_supervise(relay_cmd, ui_cmd, env=env))
    except KeyboardInterrupt:
        logger.info("Shutting down")


def main() -> None:
    configure_logging()
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting relaychat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
