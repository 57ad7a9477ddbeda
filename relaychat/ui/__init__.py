"""NiceGUI interface - conversation state and presentation for the chat.

Responsibilities:
    - Conversation state: input buffer, prompt history, streamed response
    - Superseding in-flight streams on new sends and new chats
    - Safe formatting of model text for display
    - The chat page with a recent-prompts sidebar

The page itself holds no chat logic; it renders ConversationController state.
"""

from relaychat.ui.controller import ConversationController, Phase
from relaychat.ui.formatting import format_for_display

__all__ = ["ConversationController", "Phase", "format_for_display"]
