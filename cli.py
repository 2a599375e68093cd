# Role: Local developer CLI to chat with the ConversationController without the web UI.
# Prints each new history line as it lands; useful for seeing debug logs in the terminal.

from __future__ import annotations

import asyncio

import gemini_chat.config
gemini_chat.config.load_env()
gemini_chat.config.setup_logging()

from gemini_chat.core.factory import build_controller
from gemini_chat.models.state import ChatState


async def run() -> None:
    # 1) Create the controller (one session for the life of the process)
    # 2) Print history lines as the store publishes them
    # 3) Route user input -> submit_turn
    print("Gemini Chat CLI")
    print("Commands: /exit")
    print("-" * 50)

    controller = build_controller()
    printed = 0

    def on_change(state: ChatState) -> None:
        nonlocal printed
        lines = state.display_lines()
        for line in lines[printed:]:
            print(f"\n{line}")
        printed = len(lines)

    controller.subscribe(on_change)

    while True:
        try:
            user_message = (await asyncio.to_thread(input, "\n> ")).strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        if user_message.lower() in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        print("...")
        await controller.submit_turn(user_message)


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        print("\nBye!")


if __name__ == "__main__":
    main()
