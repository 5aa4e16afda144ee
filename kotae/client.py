# -*- coding: utf-8 -*-
# BSD 3-Clause License
#
# Copyright (c) 2020-2024, Faster Speeding
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notfice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of the copyright holder nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Client which dispatches application command interactions to their callbacks."""
from __future__ import annotations

__all__: list[str] = ["CallbackSig", "CommandClient", "CommandError", "Context"]

import logging
import typing
from collections import abc as collections

import alluka as alluka_
import alluka.local as alluka_local
import hikari

from . import cache as cache_
from . import config as config_
from . import interactions
from . import resolver as resolver_
from . import rest

if typing.TYPE_CHECKING:
    import datetime

    from typing_extensions import Self

    from . import _internal
    from . import commands
    from . import entities

    _CallbackSigT = typing.TypeVar("_CallbackSigT", bound="CallbackSig")


CallbackSig = collections.Callable[..., collections.Coroutine[typing.Any, typing.Any, None]]
"""Type hint of a command callback.

The first positional argument will be the command's [Context][kotae.client.Context]
and any other arguments are resolved with dependency injection.
"""

_LOGGER = logging.getLogger("hikari.kotae.client")


class CommandError(Exception):
    """Error which is sent as a response to a command call."""

    def __init__(self, content: typing.Any = None, /, *, ephemeral: typing.Optional[bool] = None) -> None:
        """Initialise a command error.

        Parameters
        ----------
        content
            The message content to respond with.

            See [ResponseController.create_message][kotae.interactions.ResponseController.create_message]
            for the accepted types.
        ephemeral
            Whether the response should be ephemeral.

            Defaults to the client's configured default.
        """
        super().__init__(content)
        self._content = content
        self._ephemeral = ephemeral

    def __str__(self) -> str:
        return str(self._content) if self._content is not None else ""

    @property
    def content(self) -> typing.Any:
        """The message content this error responds with."""
        return self._content

    async def send(self, ctx: Context, /) -> interactions.MessageResponse:
        """Send this error as an interaction response.

        This creates the initial response or a followup depending on
        whether the interaction has already been acknowledged.

        Parameters
        ----------
        ctx
            The command context to respond to.
        """
        return await ctx.respond(self._content, ephemeral=self._ephemeral)


class Context:
    """The context of a command call."""

    __slots__ = ("_client", "_controller", "_interaction")

    def __init__(
        self,
        client: CommandClient,
        interaction: interactions.CommandInteraction,
        controller: interactions.ResponseController,
        /,
    ) -> None:
        self._client = client
        self._controller = controller
        self._interaction = interaction

    @property
    def acknowledged(self) -> bool:
        """Whether the interaction has been acknowledged."""
        return self._controller.acknowledged

    @property
    def author(self) -> typing.Optional[entities.User]:
        """The user who triggered this command."""
        return self._interaction.author

    @property
    def channel_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the channel the command was called in."""
        return self._interaction.channel_id

    @property
    def client(self) -> CommandClient:
        """The command client this context is bound to."""
        return self._client

    @property
    def command_name(self) -> str:
        """Name of the top-level command which was called."""
        return self._interaction.data.name

    @property
    def controller(self) -> interactions.ResponseController:
        """The controller used to respond to this command's interaction."""
        return self._controller

    @property
    def expires_at(self) -> datetime.datetime:
        """When this context's interaction expires."""
        return self._controller.expires_at

    @property
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the guild the command was called in.

        This is [None][] for commands called in DMs.
        """
        return self._interaction.guild_id

    @property
    def identity(self) -> interactions.InteractionIdentity:
        """Identity of the interaction this context is for."""
        return self._interaction.identity

    @property
    def interaction(self) -> interactions.CommandInteraction:
        """The interaction this context is for."""
        return self._interaction

    @property
    def member(self) -> typing.Optional[entities.Member]:
        """The member who triggered this command, if it was called in a guild."""
        return self._interaction.member

    @property
    def options(self) -> dict[str, commands.OptionValue]:
        """The options passed to the called (sub-)command keyed by name."""
        return self._interaction.data.leaf_options()

    @property
    def resolved(self) -> typing.Optional[resolver_.ResolvedData]:
        """Entities resolved for this command call."""
        return self._interaction.data.resolved

    @property
    def triggering_name(self) -> str:
        """Full name of the called command including any sub-command groups."""
        return self._interaction.data.invoked_path()

    async def defer(
        self, flags: typing.Union[int, hikari.MessageFlag, None] = None, /, *, ephemeral: typing.Optional[bool] = None
    ) -> None:
        """Defer the response to this command.

        See [ResponseController.defer][kotae.interactions.ResponseController.defer].
        """
        await self._controller.defer(flags, ephemeral=ephemeral)

    async def respond(
        self,
        content: typing.Any = None,
        /,
        *,
        ephemeral: typing.Optional[bool] = None,
        followup_if_acknowledged: bool = True,
    ) -> interactions.MessageResponse:
        """Respond to this command with a message.

        See [ResponseController.create_message][kotae.interactions.ResponseController.create_message].
        """
        return await self._controller.create_message(
            content, ephemeral=ephemeral, followup_if_acknowledged=followup_if_acknowledged
        )

    create_message = respond

    async def create_followup(
        self, content: typing.Any = None, /, *, ephemeral: typing.Optional[bool] = None
    ) -> hikari.Message:
        """Create a followup message for this command.

        See [ResponseController.create_followup][kotae.interactions.ResponseController.create_followup].
        """
        return await self._controller.create_followup(content, ephemeral=ephemeral)

    async def edit_message(
        self, message: typing.Union[str, hikari.SnowflakeishOr[hikari.PartialMessage]], content: typing.Any = None, /
    ) -> hikari.Message:
        """Edit one of this command's response messages.

        See [ResponseController.edit_message][kotae.interactions.ResponseController.edit_message].
        """
        return await self._controller.edit_message(message, content)

    async def edit_original_message(self, content: typing.Any = None, /) -> hikari.Message:
        """Edit this command's initial response."""
        return await self._controller.edit_original_message(content)

    async def delete_message(self, message: typing.Union[str, hikari.SnowflakeishOr[hikari.PartialMessage]], /) -> None:
        """Delete one of this command's response messages.

        See [ResponseController.delete_message][kotae.interactions.ResponseController.delete_message].
        """
        await self._controller.delete_message(message)

    async def delete_original_message(self) -> None:
        """Delete this command's initial response."""
        await self._controller.delete_original_message()

    async def fetch_original_message(self) -> hikari.Message:
        """Fetch this command's initial response."""
        return await self._controller.fetch_original_message()


class CommandClient:
    """Client which parses command interactions and calls their registered callbacks."""

    __slots__ = ("_alluka", "_cache", "_commands", "_config", "_guilds", "_requests", "_resolver")

    def __init__(
        self,
        requests: rest.RequestService,
        /,
        *,
        cache: typing.Optional[cache_.EntityCache] = None,
        guilds: typing.Optional[cache_.GuildRegistry] = None,
        alluka: typing.Optional[alluka_.abc.Client] = None,
        config: typing.Optional[config_.Config] = None,
    ) -> None:
        """Initialise a command client.

        This registers [CommandClient][kotae.client.CommandClient],
        [RequestService][kotae.rest.RequestService],
        [EntityCache][kotae.cache.EntityCache] and
        [GuildRegistry][kotae.cache.GuildRegistry] as type dependencies when
        `alluka` isn't passed.

        Parameters
        ----------
        requests
            The service used to make response requests.
        cache
            The shared entity cache.

            Defaults to a new [MemoryCache][kotae.cache.MemoryCache].
        guilds
            The registry used to look up the guilds of members.

            Defaults to `cache` if it's also a guild registry, otherwise a new
            [MemoryCache][kotae.cache.MemoryCache].
        alluka
            The Alluka client to use for callback dependency injection.
        config
            The client's config.
        """
        if cache is None:
            cache = guilds if isinstance(guilds, cache_.EntityCache) else cache_.MemoryCache()

        if guilds is None:
            guilds = cache if isinstance(cache, cache_.GuildRegistry) else cache_.MemoryCache()

        self._cache = cache
        self._commands: dict[str, CallbackSig] = {}
        self._config = config or config_.Config()
        self._guilds = guilds
        self._requests = requests
        self._resolver = resolver_.Resolver(cache, guilds)

        if alluka is None:
            alluka = alluka_local.get(default=None) or alluka_.Client()
            self._set_standard_deps(alluka)

        self._alluka = alluka

    @classmethod
    def from_rest_bot(
        cls,
        bot: hikari.RESTAware,
        /,
        *,
        cache: typing.Optional[cache_.EntityCache] = None,
        guilds: typing.Optional[cache_.GuildRegistry] = None,
        alluka: typing.Optional[alluka_.abc.Client] = None,
        config: typing.Optional[config_.Config] = None,
    ) -> Self:
        """Build a command client which responds through a bot's REST client.

        Parameters
        ----------
        bot
            The bot whose REST client responses should be made with.

            This is wrapped in a [RESTRequestService][kotae.rest.RESTRequestService].

        Returns
        -------
        CommandClient
            The initialised command client.
        """
        return cls(rest.RESTRequestService(bot.rest), cache=cache, guilds=guilds, alluka=alluka, config=config)

    @property
    def alluka(self) -> alluka_.abc.Client:
        """The Alluka client this uses for callback dependency injection."""
        return self._alluka

    @property
    def cache(self) -> cache_.EntityCache:
        """The shared user and member cache resolved entities are stored in."""
        return self._cache

    @property
    def commands(self) -> collections.Mapping[str, CallbackSig]:
        """Mapping of command names to their callbacks."""
        return self._commands.copy()

    @property
    def config(self) -> config_.Config:
        """The config this client was initialised with."""
        return self._config

    @property
    def guilds(self) -> cache_.GuildRegistry:
        """The registry guilds are looked up in when resolving members."""
        return self._guilds

    @property
    def requests(self) -> rest.RequestService:
        """The service this client responds to interactions with."""
        return self._requests

    @property
    def resolver(self) -> resolver_.Resolver:
        """The resolver used to hydrate interaction payloads."""
        return self._resolver

    def _set_standard_deps(self, alluka: alluka_.abc.Client) -> None:
        alluka.set_type_dependency(CommandClient, self)
        alluka.set_type_dependency(rest.RequestService, self._requests)
        alluka.set_type_dependency(cache_.EntityCache, self._cache)
        alluka.set_type_dependency(cache_.GuildRegistry, self._guilds)

    def add_command(self, name: str, callback: CallbackSig, /) -> Self:
        """Add a command callback.

        Parameters
        ----------
        name
            Name of the top-level command.
        callback
            The command's callback.

        Raises
        ------
        ValueError
            If a command is already registered under `name`.
        """
        if name in self._commands:
            raise ValueError(f"{name!r} command is already registered")

        self._commands[name] = callback
        return self

    def with_command(self, name: str, /) -> collections.Callable[[_CallbackSigT], _CallbackSigT]:
        """Add a command callback through a decorator call.

        Examples
        --------
        ```py
        @client.with_command("echo")
        async def echo(ctx: kotae.Context) -> None:
            await ctx.respond(ctx.options["text"].value)
        ```
        """

        def decorator(callback: _CallbackSigT, /) -> _CallbackSigT:
            self.add_command(name, callback)
            return callback

        return decorator

    def remove_command(self, name: str, /) -> Self:
        """Remove a command callback.

        Raises
        ------
        KeyError
            If no command is registered under `name`.
        """
        del self._commands[name]
        return self

    def parse(self, payload: _internal.RawPayload, /) -> interactions.CommandInteraction:
        """Parse a command interaction payload with this client's resolver.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If the payload is malformed.
        """
        return interactions.CommandInteraction.from_payload(payload, resolver=self._resolver)

    def build_context(self, interaction: interactions.CommandInteraction, /) -> Context:
        """Build the context for a parsed command interaction."""
        controller = interaction.build_controller(
            self._requests,
            allowed_mentions=self._config.default_mentions(),
            ephemeral_default=self._config.ephemeral_default,
        )
        return Context(self, interaction, controller)

    async def on_payload(self, payload: _internal.RawPayload, /) -> typing.Optional[Context]:
        """Process a raw interaction payload.

        Parameters
        ----------
        payload
            The raw interaction payload.

        Returns
        -------
        Context | None
            The context the command was called with or [None][] if the
            payload wasn't an application command interaction.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If the payload is malformed.
        """
        if payload.get("type") != hikari.InteractionType.APPLICATION_COMMAND:
            _LOGGER.debug("Ignoring interaction of type %s", payload.get("type"))
            return None

        ctx = self.build_context(self.parse(payload))
        callback = self._commands.get(ctx.command_name)
        if not callback:
            _LOGGER.warning("Received interaction for unknown command %r", ctx.command_name)
            await ctx.respond("Command not found", ephemeral=True)
            return ctx

        try:
            await self._alluka.call_with_async_di(callback, ctx)

        except CommandError as exc:
            await exc.send(ctx)

        except Exception:
            _LOGGER.exception("Command %r raised an unexpected exception", ctx.triggering_name)
            raise

        return ctx
