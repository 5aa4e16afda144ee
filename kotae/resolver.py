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
"""Hydration of an interaction's "resolved" entities."""
from __future__ import annotations

__all__: list[str] = ["ResolvedData", "Resolver", "SkippedEntry"]

import logging
import typing
from collections import abc as collections

import hikari

from . import _internal
from . import entities
from . import errors

if typing.TYPE_CHECKING:
    from . import cache as cache_

_LOGGER = logging.getLogger("hikari.kotae.resolver")


class SkippedEntry(typing.NamedTuple):
    """A resolved entry which couldn't be hydrated."""

    kind: str
    """Name of the entry's kind (e.g. `"users"`)."""

    raw_id: str
    """The entry's raw ID."""

    error: errors.PayloadShapeError
    """The error which was raised while hydrating the entry."""


class ResolvedData:
    """Typed entities resolved for an interaction.

    A kind is [None][] when it wasn't included in the interaction payload.
    """

    __slots__ = ("channels", "members", "messages", "partial_members", "roles", "skipped", "users")

    def __init__(
        self,
        *,
        channels: typing.Optional[dict[hikari.Snowflake, entities.Channel]] = None,
        members: typing.Optional[dict[hikari.Snowflake, entities.Member]] = None,
        messages: typing.Optional[dict[hikari.Snowflake, entities.Message]] = None,
        roles: typing.Optional[dict[hikari.Snowflake, entities.Role]] = None,
        users: typing.Optional[dict[hikari.Snowflake, entities.User]] = None,
        partial_members: collections.Sequence[hikari.Snowflake] = (),
        skipped: collections.Sequence[SkippedEntry] = (),
    ) -> None:
        self.channels = channels
        self.members = members
        self.messages = messages
        self.roles = roles
        self.users = users
        self.partial_members: list[hikari.Snowflake] = list(partial_members)
        """IDs of the members which were hydrated without their guild."""

        self.skipped: list[SkippedEntry] = list(skipped)
        """Entries which were left out because they were malformed."""

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{name}={len(value)}"
            for name in ("users", "members", "roles", "channels", "messages")
            if (value := getattr(self, name)) is not None
        )
        return f"ResolvedData({counts}, skipped={len(self.skipped)})"


_HydratorT = collections.Callable[[str, _internal.RawPayload], typing.Any]


class Resolver:
    """Converts the raw resolved block of an interaction into typed entities.

    Users and members are written through the shared entity cache so that
    the objects returned here are the same objects returned by direct cache
    lookups.
    """

    __slots__ = ("_cache", "_guilds")

    def __init__(self, cache: cache_.EntityCache, guilds: cache_.GuildRegistry, /) -> None:
        """Initialise a resolver.

        Parameters
        ----------
        cache
            The shared user and member caches.
        guilds
            Registry used to look up the guild that resolved members belong to.
        """
        self._cache = cache
        self._guilds = guilds

    @property
    def cache(self) -> cache_.EntityCache:
        """The shared entity cache this resolver writes users and members into."""
        return self._cache

    @property
    def guilds(self) -> cache_.GuildRegistry:
        """The guild registry this resolver looks members' guilds up in."""
        return self._guilds

    def resolve(
        self, raw: _internal.RawPayload, /, *, guild_id: typing.Optional[hikari.Snowflakeish] = None
    ) -> ResolvedData:
        """Hydrate a raw resolved block.

        Malformed entries don't stop hydration; they're left out of the
        result and reported in [ResolvedData.skipped][kotae.resolver.ResolvedData.skipped].

        Parameters
        ----------
        raw
            The interaction's raw resolved block.
        guild_id
            ID of the guild the interaction was triggered in, if applicable.

        Returns
        -------
        ResolvedData
            The hydrated entities.
        """
        guild_id = hikari.Snowflake(guild_id) if guild_id is not None else None
        result = ResolvedData()
        guild: typing.Optional[entities.Guild] = None
        if raw.get("members") is not None:
            if guild_id is None:
                _LOGGER.debug("No guild ID given, resolving members as partial members")

            elif (guild := self._guilds.get_guild(guild_id)) is None:
                _LOGGER.debug("Guild %s isn't registered, resolving its members as partial members", guild_id)

        raw_users: _internal.RawPayload = raw.get("users") or {}

        def hydrate_member(raw_id: str, payload: _internal.RawPayload, /) -> entities.Member:
            user = self._cache.upsert_user(_member_user(raw_id, payload, raw_users))
            member = self._cache.upsert_member(payload, user=user, guild_id=guild_id, guild=guild)
            if member.is_partial:
                result.partial_members.append(member.id)

            return member

        hydrators: dict[str, _HydratorT] = {
            "users": lambda _, payload: self._cache.upsert_user(payload),
            "members": hydrate_member,
            "roles": lambda _, payload: entities.Role.from_payload(payload, guild_id=guild_id),
            "channels": lambda _, payload: entities.Channel.from_payload(payload, guild_id=guild_id),
            "messages": lambda _, payload: self._hydrate_message(payload),
        }
        for kind, hydrate in hydrators.items():
            if (entries := raw.get(kind)) is not None:
                setattr(result, kind, self._hydrate_kind(kind, entries, hydrate, result.skipped))

        return result

    def _hydrate_kind(
        self,
        kind: str,
        entries: collections.Mapping[str, _internal.RawPayload],
        hydrate: _HydratorT,
        skipped: list[SkippedEntry],
        /,
    ) -> dict[hikari.Snowflake, typing.Any]:
        output: dict[hikari.Snowflake, typing.Any] = {}
        for raw_id, payload in entries.items():
            try:
                try:
                    entity_id = hikari.Snowflake(raw_id)

                except (TypeError, ValueError):
                    raise errors.PayloadShapeError(kind, str(raw_id), "id") from None

                if not isinstance(payload, collections.Mapping):
                    raise errors.PayloadShapeError(kind, str(raw_id), "<object>")

                output[entity_id] = hydrate(str(raw_id), payload)

            except errors.PayloadShapeError as exc:
                _LOGGER.warning("Skipping malformed resolved %s entry %s: %s", kind, raw_id, exc)
                skipped.append(SkippedEntry(kind, str(raw_id), exc))

        return output

    def _hydrate_message(self, payload: _internal.RawPayload, /) -> entities.Message:
        author: typing.Optional[entities.User] = None
        if (raw_author := payload.get("author")) is not None:
            author = self._cache.upsert_user(raw_author)

        return entities.Message.from_payload(payload, author=author)

    def resolve_member(
        self,
        payload: _internal.RawPayload,
        /,
        *,
        guild_id: typing.Optional[hikari.Snowflakeish],
    ) -> entities.Member:
        """Hydrate a full member payload (one which includes its `user` field).

        This is used for the member who triggered an interaction. Members
        without a `guild_id` are hydrated as partial members.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If the payload is malformed.
        """
        guild_id = hikari.Snowflake(guild_id) if guild_id is not None else None
        raw_user = payload.get("user")
        if not isinstance(raw_user, collections.Mapping):
            raise errors.PayloadShapeError("member", None, "user")

        user = self._cache.upsert_user(typing.cast("_internal.RawPayload", raw_user))
        guild = self._guilds.get_guild(guild_id) if guild_id is not None else None
        return self._cache.upsert_member(payload, user=user, guild_id=guild_id, guild=guild)

    def resolve_user(self, payload: _internal.RawPayload, /) -> entities.User:
        """Hydrate a user payload through the shared user cache.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If the payload is malformed.
        """
        return self._cache.upsert_user(payload)


def _member_user(
    raw_id: str, payload: _internal.RawPayload, raw_users: _internal.RawPayload, /
) -> _internal.RawPayload:
    # Resolved members don't include their user; it lives under the same ID in the resolved users.
    if isinstance(user := payload.get("user"), collections.Mapping):
        return typing.cast("_internal.RawPayload", user)

    if isinstance(user := raw_users.get(raw_id), collections.Mapping):
        return typing.cast("_internal.RawPayload", user)

    raise errors.PayloadShapeError("member", raw_id, "user")
