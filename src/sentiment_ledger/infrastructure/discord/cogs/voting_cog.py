"""Slash-command cog exposing the voting ledger operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from sentiment_ledger.domain.shared.exceptions import DomainError
from sentiment_ledger.domain.shared.messages import DiscordUIMessages, ErrorMessages
from sentiment_ledger.domain.voting.value_objects import VoteOption

if TYPE_CHECKING:
    from ....application.services.ledger_service import LedgerApplicationService
    from ....config.container import Container

VOTE_CHOICES = [
    app_commands.Choice(name=option.label, value=option.name.lower()) for option in VoteOption
]


def caller_identity(interaction: discord.Interaction) -> str:
    """Map the invoking Discord user to a ledger identity."""
    return str(interaction.user.id)


async def send_ephemeral(interaction: discord.Interaction, message: str) -> None:
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)


class VotingCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @property
    def ledger(self) -> LedgerApplicationService:
        return self.container.ledger_service

    async def _reject(self, interaction: discord.Interaction, error: DomainError) -> None:
        await send_ephemeral(
            interaction, DiscordUIMessages.ERROR_REJECTED.format(message=error.message)
        )

    @app_commands.command(name="claim-admin", description="Claim the ledger administrator role.")
    async def claim_admin(self, interaction: discord.Interaction) -> None:
        caller = caller_identity(interaction)
        if await self.ledger.claim_administrator(caller):
            await send_ephemeral(interaction, DiscordUIMessages.ADMIN_CLAIMED)
            return

        status = self.ledger.get_status()
        await send_ephemeral(
            interaction,
            DiscordUIMessages.ADMIN_ALREADY_CLAIMED.format(administrator=status.administrator),
        )

    @app_commands.command(name="start-voting", description="Open voting on a new proposal.")
    @app_commands.describe(proposal="The proposal text voters decide on")
    async def start_voting(self, interaction: discord.Interaction, proposal: str) -> None:
        try:
            await self.ledger.start_voting(caller_identity(interaction), proposal)
        except DomainError as e:
            await self._reject(interaction, e)
            return

        await interaction.response.send_message(
            DiscordUIMessages.VOTING_STARTED.format(proposal=proposal)
        )

    @app_commands.command(name="sentiment", description="Set the sentiment score (-100 to 100).")
    @app_commands.describe(score="Sentiment score biasing positive vs negative votes")
    async def sentiment(self, interaction: discord.Interaction, score: int) -> None:
        try:
            await self.ledger.update_sentiment(caller_identity(interaction), score)
        except DomainError as e:
            await self._reject(interaction, e)
            return

        await send_ephemeral(interaction, DiscordUIMessages.SENTIMENT_UPDATED.format(score=score))

    @app_commands.command(name="vote", description="Cast your vote on the open proposal.")
    @app_commands.describe(option="Your vote")
    @app_commands.choices(option=VOTE_CHOICES)
    async def vote(
        self, interaction: discord.Interaction, option: app_commands.Choice[str]
    ) -> None:
        vote_option = VoteOption.from_label(option.value)
        try:
            await self.ledger.cast_vote(caller_identity(interaction), vote_option)
        except DomainError as e:
            await self._reject(interaction, e)
            return

        await send_ephemeral(
            interaction, DiscordUIMessages.VOTE_RECORDED.format(option=vote_option.label)
        )

    @app_commands.command(name="end-voting", description="Close voting and publish the outcome.")
    async def end_voting(self, interaction: discord.Interaction) -> None:
        try:
            result = await self.ledger.end_voting(caller_identity(interaction))
        except DomainError as e:
            await self._reject(interaction, e)
            return

        await interaction.response.send_message(
            DiscordUIMessages.VOTING_ENDED.format(
                outcome=result.outcome.label,
                positive_tally=result.final_positive_tally,
                negative_tally=result.final_negative_tally,
            )
        )

    @app_commands.command(name="vote-counts", description="Show the raw vote counts.")
    async def vote_counts(self, interaction: discord.Interaction) -> None:
        counts = self.ledger.get_vote_counts()
        await send_ephemeral(
            interaction,
            DiscordUIMessages.VOTE_COUNTS.format(
                positive=counts.positive, negative=counts.negative, neutral=counts.neutral
            ),
        )

    @app_commands.command(name="voting-status", description="Show the current ledger status.")
    async def voting_status(self, interaction: discord.Interaction) -> None:
        status = self.ledger.get_status()

        embed = discord.Embed(
            title=DiscordUIMessages.STATUS_TITLE,
            description=status.proposal_text or DiscordUIMessages.STATUS_NO_PROPOSAL,
            color=discord.Color.green() if status.voting_open else discord.Color.greyple(),
        )
        embed.add_field(
            name="Voting",
            value=(
                DiscordUIMessages.STATUS_OPEN
                if status.voting_open
                else DiscordUIMessages.STATUS_CLOSED
            ),
        )
        embed.add_field(name="Sentiment", value=str(status.sentiment_score))
        embed.add_field(
            name="Administrator",
            value=(
                f"<@{status.administrator}>"
                if status.administrator
                else DiscordUIMessages.STATUS_NO_ADMIN
            ),
        )
        embed.add_field(
            name="Votes",
            value=DiscordUIMessages.VOTE_COUNTS.format(
                positive=status.counts.positive,
                negative=status.counts.negative,
                neutral=status.counts.neutral,
            ),
            inline=False,
        )
        embed.set_footer(text=f"{status.voter_count} identities have voted")

        await interaction.response.send_message(embed=embed, ephemeral=True)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(VotingCog(bot, container))
