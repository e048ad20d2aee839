"""Text command handling for LINE messages."""

from dataclasses import dataclass

from kcal_bot.services.stats import SummaryService

HELP_MESSAGE = "Send a meal photo.\nCommands:\n• summary day\n• summary week"

_SUMMARY_COMMANDS = {"summary day": "day", "summary week": "week"}


@dataclass
class TextCommandHandler:
    """Map text messages to summaries or the help reply."""

    summary_service: SummaryService

    async def handle(self, line_user_id: str, text: str) -> str:
        """Return the reply text for a user's message."""
        span = _SUMMARY_COMMANDS.get(text.lower().strip())
        if span is None:
            return HELP_MESSAGE
        return await self.summary_service.summarize(line_user_id, span)
