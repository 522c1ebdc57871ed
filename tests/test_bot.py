"""Unit tests for JukeboxBot setup, command sync and shutdown."""

from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest
from discord.ext import commands

from discord_jukebox.config.settings import DiscordSettings, Settings
from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.infrastructure.discord.bot import COG_EXTENSIONS, JukeboxBot, create_bot


def make_settings(**discord_kwargs) -> Settings:
    return Settings(_env_file=None, discord=DiscordSettings(**discord_kwargs))


@pytest.fixture
def container():
    container = MagicMock()
    container.shutdown = AsyncMock(return_value=2)
    return container


@pytest.fixture
def bot(container):
    return create_bot(container, make_settings())


class TestConstruction:
    async def test_intents_and_container(self, bot, container):
        assert isinstance(bot, JukeboxBot)
        assert bot.intents.voice_states
        assert bot.intents.guilds
        assert not bot.intents.message_content
        assert bot.container is container
        container.set_bot.assert_called_once_with(bot)

    async def test_no_help_command(self, bot):
        assert bot.help_command is None


class TestSetupHook:
    async def test_loads_every_cog(self, bot):
        with (
            patch.object(bot, "load_extension", AsyncMock()) as load,
            patch.object(bot, "_sync_commands", AsyncMock()) as sync,
        ):
            await bot.setup_hook()

        assert [c.args[0] for c in load.await_args_list] == list(COG_EXTENSIONS)
        sync.assert_awaited_once()

    async def test_cog_failure_does_not_abort(self, bot):
        failing = AsyncMock(side_effect=commands.ExtensionFailed("x", RuntimeError("boom")))
        with (
            patch.object(bot, "load_extension", failing),
            patch.object(bot, "_sync_commands", AsyncMock()) as sync,
        ):
            await bot.setup_hook()

        assert failing.await_count == len(COG_EXTENSIONS)
        sync.assert_awaited_once()

    async def test_sync_can_be_disabled(self, container):
        bot = create_bot(container, make_settings(sync_on_startup=False))
        with (
            patch.object(bot, "load_extension", AsyncMock()),
            patch.object(bot, "_sync_commands", AsyncMock()) as sync,
        ):
            await bot.setup_hook()

        sync.assert_not_awaited()


class TestSyncCommands:
    async def test_global_sync_without_guilds(self, bot):
        with (
            patch.object(bot.tree, "sync", AsyncMock(return_value=[1, 2])) as sync,
            patch.object(bot.tree, "copy_global_to") as copy,
        ):
            await bot._sync_commands()

        sync.assert_awaited_once_with()
        copy.assert_not_called()

    async def test_guild_sync_deduplicates(self, container):
        bot = create_bot(
            container, make_settings(guild_ids=(123456789, 987654321), test_guild_ids=(123456789,))
        )
        with (
            patch.object(bot.tree, "sync", AsyncMock(return_value=[])) as sync,
            patch.object(bot.tree, "copy_global_to") as copy,
        ):
            await bot._sync_commands()

        synced_ids = [c.kwargs["guild"].id for c in sync.await_args_list]
        assert synced_ids == [123456789, 987654321]
        assert copy.call_count == 2


class TestAppCommandError:
    async def test_replies_ephemerally(self, bot):
        interaction = MagicMock(spec=discord.Interaction)
        interaction.response = MagicMock()
        interaction.response.is_done.return_value = False
        interaction.response.send_message = AsyncMock()
        interaction.command = None
        error = RuntimeError("boom")

        await bot._on_app_command_error(interaction, error)

        interaction.response.send_message.assert_awaited_once_with(
            DiscordUIMessages.ERROR_OCCURRED.format(error=error), ephemeral=True
        )


class TestClose:
    async def test_close_releases_queues(self, bot, container):
        with patch.object(commands.Bot, "close", AsyncMock()) as super_close:
            await bot.close()

        container.shutdown.assert_awaited_once()
        super_close.assert_awaited_once()
        assert bot._shutdown_event.is_set()
