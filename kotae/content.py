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
"""Normalisation of message content passed to the response methods.

Response methods accept a few loose shapes of content: a bare value (which
is treated as text), a mapping using the platform's JSON keys or one of the
types defined here. These are validated once by [to_content][kotae.content.to_content]
and then handed to the request service, which renders them with hikari.
"""
from __future__ import annotations

__all__: list[str] = ["AllowedMentions", "Content", "MessageContent", "TextContent", "to_content"]

import typing
from collections import abc as collections

import hikari


_MentionTargetsT = typing.Union[bool, collections.Sequence[hikari.Snowflakeish], None]


class AllowedMentions(typing.NamedTuple):
    """Which mentions a message is allowed to ping.

    Fields left as [None][] fall back to the client's default.
    """

    everyone: typing.Optional[bool] = None
    """Whether `@everyone` and `@here` mentions should ping."""

    users: _MentionTargetsT = None
    """[True][] to allow all user mentions, [False][] for none or a sequence of specific user IDs."""

    roles: _MentionTargetsT = None
    """[True][] to allow all role mentions, [False][] for none or a sequence of specific role IDs."""

    @classmethod
    def from_mapping(cls, mapping: collections.Mapping[str, typing.Any], /) -> AllowedMentions:
        """Build allowed mentions from a mapping."""
        return cls(everyone=mapping.get("everyone"), users=mapping.get("users"), roles=mapping.get("roles"))

    def merge(self, default: typing.Optional[AllowedMentions], /) -> AllowedMentions:
        """Fill the unset fields of these allowed mentions from `default`."""
        if default is None:
            return self

        return AllowedMentions(
            everyone=default.everyone if self.everyone is None else self.everyone,
            users=default.users if self.users is None else self.users,
            roles=default.roles if self.roles is None else self.roles,
        )

    def to_kwargs(self) -> dict[str, typing.Any]:
        """Render these allowed mentions to the keyword arguments hikari's message methods take.

        Returns
        -------
        dict[str, typing.Any]
            The set fields as `mentions_everyone`, `user_mentions` and `role_mentions`.
        """
        result: dict[str, typing.Any] = {}
        if self.everyone is not None:
            result["mentions_everyone"] = self.everyone

        for name, value in (("user_mentions", self.users), ("role_mentions", self.roles)):
            if isinstance(value, bool):
                result[name] = value

            elif value is not None:
                result[name] = [hikari.Snowflake(entry) for entry in value]

        return result


class TextContent(typing.NamedTuple):
    """Content which only consists of text."""

    text: str
    """The message's text content."""

    @property
    def has_body(self) -> bool:
        """Whether this content has text or embeds."""
        return bool(self.text)


class MessageContent(typing.NamedTuple):
    """Structured message content."""

    text: typing.Optional[str] = None
    """The message's text content."""

    embeds: typing.Optional[collections.Sequence[typing.Any]] = None
    """Sequence of [hikari.Embed][hikari.embeds.Embed] objects or embed payloads.

    Embed payloads are deserialised by the request service.
    """

    flags: typing.Union[int, hikari.MessageFlag, None] = None
    """The message's flags."""

    attachments: typing.Optional[collections.Sequence[hikari.Resourceish]] = None
    """Files to upload with the message."""

    components: typing.Optional[collections.Sequence[hikari.api.ComponentBuilder]] = None
    """The message's component builders."""

    tts: typing.Optional[bool] = None
    """Whether the message should be read out with text-to-speech."""

    allowed_mentions: typing.Optional[AllowedMentions] = None
    """Which mentions this message may ping."""

    @property
    def has_body(self) -> bool:
        """Whether this content has text or embeds."""
        return bool(self.text) or bool(self.embeds)


Content = typing.Union[TextContent, MessageContent]
"""Union of the normalised content types."""


def _embeds(value: typing.Any, /) -> typing.Optional[list[typing.Any]]:
    if value is None:
        return None

    if isinstance(value, (hikari.Embed, collections.Mapping)):
        return [value]

    return list(value)


def to_content(value: typing.Any = None, /) -> Content:
    """Normalise loose message content.

    Parameters
    ----------
    value
        The content to normalise.

        * [TextContent][kotae.content.TextContent] and
          [MessageContent][kotae.content.MessageContent] are returned as-is.
        * [None][] results in an empty message content.
        * Mappings are read using the platform's JSON keys (`content`,
          `embeds`, `flags`, `attachments`, `components`, `tts` and
          `allowed_mentions`). A non-string `content` value is stringified.
        * A [hikari.Embed][hikari.embeds.Embed] is treated as a single embed.
        * Anything else is stringified and treated as text.

    Returns
    -------
    Content
        The normalised content.
    """
    if isinstance(value, (TextContent, MessageContent)):
        return value

    if value is None:
        return MessageContent()

    if isinstance(value, hikari.Embed):
        return MessageContent(embeds=[value])

    if isinstance(value, collections.Mapping):
        value = typing.cast("collections.Mapping[str, typing.Any]", value)
        text = value.get("content")
        mentions = value.get("allowed_mentions", value.get("allowedMentions"))
        if isinstance(mentions, collections.Mapping):
            mentions = AllowedMentions.from_mapping(typing.cast("collections.Mapping[str, typing.Any]", mentions))

        return MessageContent(
            text=text if text is None or isinstance(text, str) else str(text),
            embeds=_embeds(value.get("embeds")),
            flags=value.get("flags"),
            attachments=value.get("attachments"),
            components=value.get("components"),
            tts=value.get("tts"),
            allowed_mentions=mentions,
        )

    return TextContent(str(value))

