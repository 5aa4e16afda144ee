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
"""Services used to make an interaction's response requests."""
from __future__ import annotations

__all__: list[str] = ["RESTRequestService", "RequestService"]

import abc
import logging
import typing
from collections import abc as collections

import hikari

from . import _internal

if typing.TYPE_CHECKING:
    from . import content as content_

_LOGGER = logging.getLogger("hikari.kotae.rest")


class RequestService(abc.ABC):
    """Abstract service which makes an interaction's response requests.

    Message IDs passed to these methods may be `"@original"` to refer to
    the interaction's initial response. Errors raised by implementations are
    propagated to the caller unchanged.
    """

    __slots__ = ()

    @abc.abstractmethod
    async def create_initial_response(
        self,
        interaction_id: hikari.Snowflake,
        token: str,
        response_type: hikari.ResponseType,
        body: content_.MessageContent,
        /,
    ) -> None:
        """Create the initial response for an interaction.

        Parameters
        ----------
        interaction_id
            ID of the interaction.
        token
            The interaction's token.
        response_type
            Type of the initial response.
        body
            The response's content.

            Deferred responses only set the flags.
        """

    @abc.abstractmethod
    async def execute_followup_webhook(
        self, application_id: hikari.Snowflake, token: str, body: content_.MessageContent, /
    ) -> hikari.Message:
        """Create a followup message through the interaction's webhook.

        Returns
        -------
        hikari.messages.Message
            The created message.
        """

    @abc.abstractmethod
    async def edit_followup_message(
        self, application_id: hikari.Snowflake, token: str, message_id: str, body: content_.MessageContent, /
    ) -> hikari.Message:
        """Edit a response message.

        Returns
        -------
        hikari.messages.Message
            The edited message.
        """

    @abc.abstractmethod
    async def delete_followup_message(self, application_id: hikari.Snowflake, token: str, message_id: str, /) -> None:
        """Delete a response message."""

    @abc.abstractmethod
    async def get_followup_message(
        self, application_id: hikari.Snowflake, token: str, message_id: str, /
    ) -> hikari.Message:
        """Fetch a response message.

        Returns
        -------
        hikari.messages.Message
            The message.
        """


class RESTRequestService(RequestService):
    """Request service which makes requests through a hikari REST client.

    Requests are made through the interaction and webhook endpoints, which
    are authorised by the interaction's token rather than the REST client's
    token. Retries and rate-limits are left to the REST client and its errors
    are raised unchanged.
    """

    __slots__ = ("_rest",)

    def __init__(self, rest: hikari.api.RESTClient, /) -> None:
        """Initialise a REST request service.

        Parameters
        ----------
        rest
            The hikari REST client to make requests with.
        """
        self._rest = rest

    @property
    def rest(self) -> hikari.api.RESTClient:
        """The hikari REST client requests are made with."""
        return self._rest

    def _embed(self, embed: typing.Any, /) -> hikari.Embed:
        if isinstance(embed, collections.Mapping):
            return self._rest.entity_factory.deserialize_embed(embed)

        return embed

    def _message_kwargs(self, body: content_.MessageContent, /, *, is_edit: bool = False) -> dict[str, typing.Any]:
        kwargs: dict[str, typing.Any] = {}
        if body.text is not None:
            kwargs["content"] = body.text

        if body.embeds is not None:
            kwargs["embeds"] = [self._embed(embed) for embed in body.embeds]

        if body.attachments is not None:
            kwargs["attachments"] = list(body.attachments)

        if body.components is not None:
            kwargs["components"] = list(body.components)

        if body.allowed_mentions is not None:
            kwargs.update(body.allowed_mentions.to_kwargs())

        # Edits can't change a message's flags or text-to-speech state.
        if not is_edit:
            if body.tts is not None:
                kwargs["tts"] = body.tts

            if body.flags is not None:
                kwargs["flags"] = body.flags

        return kwargs

    async def create_initial_response(
        self,
        interaction_id: hikari.Snowflake,
        token: str,
        response_type: hikari.ResponseType,
        body: content_.MessageContent,
        /,
    ) -> None:
        # <<inherited docstring from RequestService>>.
        _LOGGER.debug("Creating %s initial response for interaction %s", response_type, interaction_id)
        await self._rest.create_interaction_response(interaction_id, token, response_type, **self._message_kwargs(body))

    async def execute_followup_webhook(
        self, application_id: hikari.Snowflake, token: str, body: content_.MessageContent, /
    ) -> hikari.Message:
        # <<inherited docstring from RequestService>>.
        return await self._rest.execute_webhook(application_id, token, **self._message_kwargs(body))

    async def edit_followup_message(
        self, application_id: hikari.Snowflake, token: str, message_id: str, body: content_.MessageContent, /
    ) -> hikari.Message:
        # <<inherited docstring from RequestService>>.
        kwargs = self._message_kwargs(body, is_edit=True)
        if message_id == _internal.ORIGINAL_MESSAGE:
            return await self._rest.edit_interaction_response(application_id, token, **kwargs)

        return await self._rest.edit_webhook_message(application_id, token, hikari.Snowflake(message_id), **kwargs)

    async def delete_followup_message(self, application_id: hikari.Snowflake, token: str, message_id: str, /) -> None:
        # <<inherited docstring from RequestService>>.
        if message_id == _internal.ORIGINAL_MESSAGE:
            await self._rest.delete_interaction_response(application_id, token)

        else:
            await self._rest.delete_webhook_message(application_id, token, hikari.Snowflake(message_id))

    async def get_followup_message(
        self, application_id: hikari.Snowflake, token: str, message_id: str, /
    ) -> hikari.Message:
        # <<inherited docstring from RequestService>>.
        if message_id == _internal.ORIGINAL_MESSAGE:
            return await self._rest.fetch_interaction_response(application_id, token)

        return await self._rest.fetch_webhook_message(application_id, token, hikari.Snowflake(message_id))
