"""Echo bot: a runnable example of the telekit update stream.

Set ``BOT_TOKEN`` (in the environment or a ``.env`` file) and run::

    python main.py

Text messages are echoed back, ``/start`` shows an inline keyboard whose
button presses are acknowledged, and ``/dice`` rolls a die.  Each event is
handled in its own task so a slow reply never stalls the poller.
"""

import asyncio

import requests

from telekit import APIException, Bot, Event, EventKind, TelekitLogger
from telekit.models import InlineKeyboardButton, InlineKeyboardMarkup

logger = TelekitLogger.get_logger()

START_MARKUP = InlineKeyboardMarkup(inline_keyboard=[[
    InlineKeyboardButton(text="👍", callback_data="like"),
    InlineKeyboardButton(text="👎", callback_data="dislike"),
]])


async def handle_message(event: Event) -> None:
    """Answer commands and echo any other text."""
    message = event.message
    text = message.text or ""
    command = text.split()[0].split("@")[0] if text.startswith("/") else ""

    if command == "/start":
        await event.reply("👋 Hi! I repeat whatever you send me.", reply_markup=START_MARKUP)
    elif command == "/dice":
        await event.bot.send_dice(message.chat.id)
    elif text:
        await event.reply(text)
    else:
        logger.debug("Ignoring non-text message", extra={"update_id": event.update_id})


async def handle_event(event: Event) -> None:
    """Dispatch one event by kind; API errors are logged, not raised."""
    try:
        if event.kind is EventKind.MESSAGE:
            await handle_message(event)
        elif event.kind is EventKind.CALLBACK_QUERY:
            await event.answer(text=f"You chose {event.callback_query.data}")
        else:
            logger.debug("No handler for event", extra={"update_id": event.update_id, "kind": event.kind.value})
    except (APIException, requests.RequestException) as exc:
        logger.warning("Handler failed", extra={"update_id": event.update_id, "error": str(exc)})


async def run() -> None:
    """Start the bot and spawn a task per incoming event.

    Raises:
        EnvironmentError: If ``BOT_TOKEN`` is not set.
    """
    bot = Bot.from_env()
    me = await bot.get_me()
    logger.info("Echo bot is running. Polling for updates...", extra={"username": me.username})

    tasks: set[asyncio.Task] = set()
    async for event in bot:
        task = asyncio.create_task(handle_event(event))
        tasks.add(task)
        task.add_done_callback(tasks.discard)


if __name__ == "__main__":
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Echo bot stopped")
