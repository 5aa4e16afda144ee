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
"""Application command interactions and the controller for their responses."""
from __future__ import annotations

__all__: list[str] = [
    "AckState",
    "CommandInteraction",
    "InteractionIdentity",
    "MessageResponse",
    "ResponseController",
    "ResponsePath",
]

import asyncio
import datetime
import enum
import logging
import typing

import hikari

from . import _internal
from . import commands
from . import content as content_
from . import entities
from . import errors

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import resolver as resolver_
    from . import rest

_INTERACTION_LIFETIME: typing.Final[datetime.timedelta] = datetime.timedelta(minutes=15)
_LOGGER = logging.getLogger("hikari.kotae.interactions")


class InteractionIdentity(typing.NamedTuple):
    """The identity of an interaction."""

    id: hikari.Snowflake
    """ID of the interaction."""

    token: str
    """The interaction's single-use continuation token."""

    application_id: hikari.Snowflake
    """ID of the application the interaction was sent to."""

    channel_id: typing.Optional[hikari.Snowflake] = None
    """ID of the channel the interaction was triggered in."""

    guild_id: typing.Optional[hikari.Snowflake] = None
    """ID of the guild the interaction was triggered in."""

    @property
    def created_at(self) -> datetime.datetime:
        """When the interaction was created."""
        return self.id.created_at

    @property
    def expires_at(self) -> datetime.datetime:
        """When the interaction's token expires.

        After this is reached all the response operations will fail remotely.
        """
        return self.id.created_at + _INTERACTION_LIFETIME


class AckState(enum.Enum):
    """Acknowledgement state of an interaction."""

    UNSET = enum.auto()
    """No initial response has completed yet."""

    UNACKNOWLEDGED = enum.auto()
    """An initial response was attempted but failed remotely.

    This is treated the same as [AckState.UNSET][kotae.interactions.AckState.UNSET].
    """

    ACKNOWLEDGED = enum.auto()
    """An initial response (deferral or message) has been made."""


class ResponsePath(str, enum.Enum):
    """Which path a message response was delivered through."""

    INITIAL = "initial"
    """The message was sent as the interaction's initial response."""

    FOLLOWUP = "followup"
    """The interaction was already acknowledged so the message was sent as a followup."""


class MessageResponse(typing.NamedTuple):
    """Result of [ResponseController.create_message][kotae.interactions.ResponseController.create_message]."""

    path: ResponsePath
    """The path the message was delivered through."""

    message: typing.Optional[hikari.Message]
    """The created message.

    This is only returned for followups as initial responses don't return
    the created message.
    """


class ResponseController:
    """Controls the responses made to a single interaction.

    An interaction may only be acknowledged once, either by deferring it or
    by creating a message response. Every later message is a followup which
    is delivered through the interaction's webhook.

    !!! note
        Only the initial response methods are serialised; other operations
        may be issued concurrently by the caller.
    """

    __slots__ = (
        "_allowed_mentions",
        "_ephemeral_default",
        "_identity",
        "_last_path",
        "_requests",
        "_response_lock",
        "_state",
    )

    def __init__(
        self,
        identity: InteractionIdentity,
        requests: rest.RequestService,
        /,
        *,
        allowed_mentions: typing.Optional[content_.AllowedMentions] = None,
        ephemeral_default: bool = False,
    ) -> None:
        """Initialise a response controller.

        Parameters
        ----------
        identity
            Identity of the interaction to respond to.
        requests
            The service used to make the requests.
        allowed_mentions
            Default allowed mentions for created and edited messages.
        ephemeral_default
            Whether created messages and deferrals should be ephemeral by default.
        """
        self._allowed_mentions = allowed_mentions
        self._ephemeral_default = ephemeral_default
        self._identity = identity
        self._last_path: typing.Optional[ResponsePath] = None
        self._requests = requests
        self._response_lock = asyncio.Lock()
        self._state = AckState.UNSET

    @property
    def acknowledged(self) -> bool:
        """Whether the interaction has been acknowledged."""
        return self._state is AckState.ACKNOWLEDGED

    @property
    def application_id(self) -> hikari.Snowflake:
        """ID of the application the interaction was sent to."""
        return self._identity.application_id

    @property
    def channel_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the channel the interaction was triggered in."""
        return self._identity.channel_id

    @property
    def expires_at(self) -> datetime.datetime:
        """When the interaction's token expires."""
        return self._identity.expires_at

    @property
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the guild the interaction was triggered in.

        This is [None][] for interactions triggered in DMs.
        """
        return self._identity.guild_id

    @property
    def id(self) -> hikari.Snowflake:
        """ID of the interaction."""
        return self._identity.id

    @property
    def identity(self) -> InteractionIdentity:
        """Identity of the interaction this controller responds to."""
        return self._identity

    @property
    def last_path(self) -> typing.Optional[ResponsePath]:
        """Path taken by the last call to [ResponseController.create_message][kotae.interactions.ResponseController.create_message].

        This is [None][] if it hasn't been called yet.
        """  # noqa: E501  - line too long
        return self._last_path

    @property
    def requests(self) -> rest.RequestService:
        """The service this controller makes requests with."""
        return self._requests

    @property
    def state(self) -> AckState:
        """The interaction's acknowledgement state."""
        return self._state

    @property
    def token(self) -> str:
        """The interaction's continuation token."""
        return self._identity.token

    def set_ephemeral_default(self, state: bool, /) -> Self:
        """Set whether created messages and deferrals should default to ephemeral.

        Parameters
        ----------
        state
            The new ephemeral default state.
        """
        self._ephemeral_default = state
        return self

    def _get_flags(
        self,
        flags: typing.Union[int, hikari.MessageFlag, None],
        /,
        *,
        ephemeral: typing.Optional[bool] = None,
    ) -> typing.Union[int, hikari.MessageFlag, None]:
        if flags is None:
            if ephemeral is True or (ephemeral is None and self._ephemeral_default):
                return hikari.MessageFlag.EPHEMERAL

            return None

        if ephemeral is True:
            return flags | hikari.MessageFlag.EPHEMERAL

        if ephemeral is False:
            return flags & ~hikari.MessageFlag.EPHEMERAL

        return flags

    def _build_body(
        self, content: content_.Content, /, *, ephemeral: typing.Optional[bool] = None, is_create: bool = True
    ) -> content_.MessageContent:
        if isinstance(content, content_.TextContent):
            content = content_.MessageContent(text=content.text)

        if is_create:
            content = content._replace(flags=self._get_flags(content.flags, ephemeral=ephemeral))

        if content.allowed_mentions is not None:
            return content._replace(allowed_mentions=content.allowed_mentions.merge(self._allowed_mentions))

        return content._replace(allowed_mentions=self._allowed_mentions)

    def _ensure_acknowledged(self, operation: str, /) -> None:
        if self._state is not AckState.ACKNOWLEDGED:
            raise errors.NotYetAcknowledgedError(operation)

    async def _create_initial_response(
        self, operation: str, response_type: hikari.ResponseType, body: content_.MessageContent, /
    ) -> None:
        if self._state is AckState.ACKNOWLEDGED:
            raise errors.AlreadyAcknowledgedError(operation)

        _LOGGER.debug("Acknowledging interaction %s from %s", self.id, operation)
        try:
            await self._requests.create_initial_response(self.id, self.token, response_type, body)

        except Exception:
            self._state = AckState.UNACKNOWLEDGED
            raise

        self._state = AckState.ACKNOWLEDGED

    async def defer(
        self,
        flags: typing.Union[int, hikari.MessageFlag, None] = None,
        /,
        *,
        ephemeral: typing.Optional[bool] = None,
    ) -> None:
        """Acknowledge the interaction with a deferred message response.

        The deferred response is later filled in by editing the original
        message or a followup.

        Parameters
        ----------
        flags
            The flags to use for the deferred response.

            As of writing the only flag which applies is
            [MessageFlag.EPHEMERAL][hikari.messages.MessageFlag.EPHEMERAL] (`64`).
        ephemeral
            Whether the deferred response should be ephemeral.

            Passing [True][] here is a shorthand for including `1 << 6` in the
            passed flags.

        Raises
        ------
        kotae.errors.AlreadyAcknowledgedError
            If the interaction has already been acknowledged.
        """
        flags = self._get_flags(flags, ephemeral=ephemeral)
        async with self._response_lock:
            await self._create_initial_response(
                "defer",
                hikari.ResponseType.DEFERRED_MESSAGE_CREATE,
                content_.MessageContent(flags=flags or hikari.MessageFlag.NONE),
            )

    acknowledge = defer
    """Alias of [ResponseController.defer][kotae.interactions.ResponseController.defer]."""

    async def create_message(
        self,
        content: typing.Any = None,
        /,
        *,
        ephemeral: typing.Optional[bool] = None,
        followup_if_acknowledged: bool = True,
    ) -> MessageResponse:
        """Respond to the interaction with a message.

        If the interaction hasn't been acknowledged yet then this creates
        the initial response. Otherwise, this is redirected to
        [ResponseController.create_followup][kotae.interactions.ResponseController.create_followup]
        unless `followup_if_acknowledged` is [False][].

        Parameters
        ----------
        content
            The message content.

            This may be a string (or any other value, which will be
            stringified), a mapping using the platform's JSON keys or a
            [kotae.content.Content][] object.
        ephemeral
            Whether the message should be ephemeral.
        followup_if_acknowledged
            Whether this should create a followup if the interaction was
            already acknowledged.

        Returns
        -------
        MessageResponse
            Which path the message was delivered through and the created
            message when it was a followup.

        Raises
        ------
        kotae.errors.EmptyContentError
            If the content has neither text nor embeds.

            No request is made in this case.
        kotae.errors.AlreadyAcknowledgedError
            If the interaction was already acknowledged and
            `followup_if_acknowledged` is [False][].
        """
        normalised = content_.to_content(content)
        if not normalised.has_body:
            raise errors.EmptyContentError

        body = self._build_body(normalised, ephemeral=ephemeral)
        async with self._response_lock:
            if self._state is not AckState.ACKNOWLEDGED:
                await self._create_initial_response("create_message", hikari.ResponseType.MESSAGE_CREATE, body)
                self._last_path = ResponsePath.INITIAL
                return MessageResponse(ResponsePath.INITIAL, None)

            if not followup_if_acknowledged:
                raise errors.AlreadyAcknowledgedError("create_message")

        _LOGGER.debug("Interaction %s already acknowledged, sending message as a followup", self.id)
        message = await self._execute_followup(body)
        self._last_path = ResponsePath.FOLLOWUP
        return MessageResponse(ResponsePath.FOLLOWUP, message)

    respond = create_message
    """Alias of [ResponseController.create_message][kotae.interactions.ResponseController.create_message]."""

    async def _execute_followup(self, body: content_.MessageContent, /) -> hikari.Message:
        return await self._requests.execute_followup_webhook(self.application_id, self.token, body)

    async def create_followup(
        self, content: typing.Any = None, /, *, ephemeral: typing.Optional[bool] = None
    ) -> hikari.Message:
        """Create a followup message for the interaction.

        Parameters
        ----------
        content
            The message content.

            See [ResponseController.create_message][kotae.interactions.ResponseController.create_message]
            for the accepted types.
        ephemeral
            Whether the followup should be ephemeral.

        Returns
        -------
        hikari.messages.Message
            The created message.

        Raises
        ------
        kotae.errors.NotYetAcknowledgedError
            If the interaction hasn't been acknowledged yet.
        """
        self._ensure_acknowledged("create_followup")
        return await self._execute_followup(self._build_body(content_.to_content(content), ephemeral=ephemeral))

    async def edit_message(
        self, message: typing.Union[str, hikari.SnowflakeishOr[hikari.PartialMessage]], content: typing.Any = None, /
    ) -> hikari.Message:
        """Edit a response message.

        Parameters
        ----------
        message
            ID of the message to edit or `"@original"` for the initial response.
        content
            The new message content.

            See [ResponseController.create_message][kotae.interactions.ResponseController.create_message]
            for the accepted types.

        Returns
        -------
        hikari.messages.Message
            The edited message.

        Raises
        ------
        kotae.errors.NotYetAcknowledgedError
            If the interaction hasn't been acknowledged yet.
        """
        return await self._edit("edit_message", message, content)

    async def edit_original_message(self, content: typing.Any = None, /) -> hikari.Message:
        """Edit the initial response message.

        Raises
        ------
        kotae.errors.NotYetAcknowledgedError
            If the interaction hasn't been acknowledged yet.
        """
        return await self._edit("edit_original_message", _internal.ORIGINAL_MESSAGE, content)

    async def _edit(
        self,
        operation: str,
        message: typing.Union[str, hikari.SnowflakeishOr[hikari.PartialMessage]],
        content: typing.Any,
        /,
    ) -> hikari.Message:
        self._ensure_acknowledged(operation)
        body = self._build_body(content_.to_content(content), is_create=False)
        return await self._requests.edit_followup_message(
            self.application_id, self.token, _internal.message_id(message), body
        )

    async def delete_message(self, message: typing.Union[str, hikari.SnowflakeishOr[hikari.PartialMessage]], /) -> None:
        """Delete a response message.

        Parameters
        ----------
        message
            ID of the message to delete or `"@original"` for the initial response.

        Raises
        ------
        kotae.errors.NotYetAcknowledgedError
            If the interaction hasn't been acknowledged yet.
        """
        await self._delete("delete_message", message)

    async def delete_original_message(self) -> None:
        """Delete the initial response message.

        Raises
        ------
        kotae.errors.NotYetAcknowledgedError
            If the interaction hasn't been acknowledged yet.
        """
        await self._delete("delete_original_message", _internal.ORIGINAL_MESSAGE)

    async def _delete(
        self, operation: str, message: typing.Union[str, hikari.SnowflakeishOr[hikari.PartialMessage]], /
    ) -> None:
        self._ensure_acknowledged(operation)
        _LOGGER.debug("Deleting response message %s for interaction %s", message, self.id)
        await self._requests.delete_followup_message(self.application_id, self.token, _internal.message_id(message))

    async def fetch_original_message(self) -> hikari.Message:
        """Fetch the initial response message.

        !!! warning
            Ephemeral initial responses can't be fetched; the request
            service's error is raised unchanged.

        Raises
        ------
        kotae.errors.NotYetAcknowledgedError
            If the interaction hasn't been acknowledged yet.
        """
        self._ensure_acknowledged("fetch_original_message")
        return await self._requests.get_followup_message(self.application_id, self.token, _internal.ORIGINAL_MESSAGE)


class CommandInteraction:
    """An application command interaction parsed from its payload."""

    __slots__ = ("data", "guild_locale", "identity", "locale", "member", "type", "user", "version")

    def __init__(
        self,
        *,
        identity: InteractionIdentity,
        data: commands.CommandData,
        type: typing.Union[hikari.InteractionType, int] = hikari.InteractionType.APPLICATION_COMMAND,
        version: int = 1,
        member: typing.Optional[entities.Member] = None,
        user: typing.Optional[entities.User] = None,
        locale: typing.Optional[str] = None,
        guild_locale: typing.Optional[str] = None,
    ) -> None:
        self.data = data
        self.guild_locale = guild_locale
        self.identity = identity
        self.locale = locale
        self.member = member
        self.type = type
        self.user = user
        self.version = version

    def __repr__(self) -> str:
        return f"CommandInteraction(id={self.id!r}, command={self.data.name!r}, guild_id={self.guild_id!r})"

    @classmethod
    def from_payload(cls, payload: _internal.RawPayload, /, *, resolver: resolver_.Resolver) -> Self:
        """Parse an application command interaction.

        The interaction's resolved entities along with its triggering
        member or user are hydrated through `resolver`.

        Parameters
        ----------
        payload
            The raw interaction payload.
        resolver
            The resolver to hydrate entities with.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If a required field of the interaction is missing.

            Malformed resolved entries are skipped and reported on
            [ResolvedData.skipped][kotae.resolver.ResolvedData.skipped] instead.
        """
        raw_id = str(payload["id"]) if payload.get("id") is not None else None
        guild_id = _internal.optional_snowflake(payload.get("guild_id"))
        identity = InteractionIdentity(
            id=_internal.get_field(payload, "id", "interaction", raw_id, convert=hikari.Snowflake),
            token=_internal.get_field(payload, "token", "interaction", raw_id, convert=str),
            application_id=_internal.get_field(
                payload, "application_id", "interaction", raw_id, convert=hikari.Snowflake
            ),
            channel_id=_internal.optional_snowflake(
                payload.get("channel_id") or (payload.get("channel") or {}).get("id")
            ),
            guild_id=guild_id,
        )
        raw_data = _internal.get_field(payload, "data", "interaction", raw_id, convert=dict)

        member: typing.Optional[entities.Member] = None
        if (raw_member := payload.get("member")) is not None:
            member = resolver.resolve_member(raw_member, guild_id=guild_id)

        user: typing.Optional[entities.User] = None
        if (raw_user := payload.get("user")) is not None:
            user = resolver.resolve_user(raw_user)

        return cls(
            identity=identity,
            data=commands.CommandData.from_payload(raw_data, resolver=resolver, guild_id=guild_id),
            type=hikari.InteractionType(payload.get("type", hikari.InteractionType.APPLICATION_COMMAND)),
            version=payload.get("version", 1),
            member=member,
            user=user,
            locale=payload.get("locale"),
            guild_locale=payload.get("guild_locale"),
        )

    @property
    def application_id(self) -> hikari.Snowflake:
        """ID of the application this interaction was sent to."""
        return self.identity.application_id

    @property
    def author(self) -> typing.Optional[entities.User]:
        """The user who triggered this interaction."""
        if self.member is not None:
            return self.member.user

        return self.user

    @property
    def channel_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the channel this interaction was triggered in."""
        return self.identity.channel_id

    @property
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the guild this interaction was triggered in.

        This is [None][] for interactions triggered in DMs.
        """
        return self.identity.guild_id

    @property
    def id(self) -> hikari.Snowflake:
        """ID of this interaction."""
        return self.identity.id

    @property
    def token(self) -> str:
        """Token used to respond to this interaction."""
        return self.identity.token

    def build_controller(
        self,
        requests: rest.RequestService,
        /,
        *,
        allowed_mentions: typing.Optional[content_.AllowedMentions] = None,
        ephemeral_default: bool = False,
    ) -> ResponseController:
        """Build a response controller bound to this interaction's identity.

        See [ResponseController.\\_\\_init\\_\\_][kotae.interactions.ResponseController.__init__]
        for the parameters.
        """
        return ResponseController(
            self.identity,
            requests,
            allowed_mentions=allowed_mentions,
            ephemeral_default=ephemeral_default,
        )
