"""Discord cogs - command handlers."""

from sentiment_ledger.infrastructure.discord.cogs.voting_cog import VotingCog

__all__ = ["VotingCog"]
