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
"""Shared entity caches and guild registries consulted while hydrating payloads."""
from __future__ import annotations

__all__: list[str] = ["EntityCache", "EntityStore", "GuildRegistry", "MemoryCache"]

import abc
import logging
import typing
from collections import abc as collections

import hikari

from . import _internal
from . import entities

_KeyT = typing.TypeVar("_KeyT")
_EntityT = typing.TypeVar("_EntityT")
MemberKey = tuple[typing.Optional[hikari.Snowflake], hikari.Snowflake]
"""Key of a cached member: `(guild_id, user_id)`.

`guild_id` is [None][] for members which were received without their guild's ID.
"""

_LOGGER = logging.getLogger("hikari.kotae.cache")


class EntityStore(typing.Generic[_KeyT, _EntityT]):
    """Store of entities keyed by ID.

    [EntityStore.upsert][kotae.cache.EntityStore.upsert] is the only way
    entities are written, which keeps one object per key for the store's
    whole lifetime.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[_KeyT, _EntityT] = {}

    def __contains__(self, key: object, /) -> bool:
        return key in self._data

    def __iter__(self) -> collections.Iterator[_KeyT]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Remove all the entities in this store."""
        self._data.clear()

    def get(self, key: _KeyT, /) -> typing.Optional[_EntityT]:
        """Get an entity by its key."""
        return self._data.get(key)

    def remove(self, key: _KeyT, /) -> typing.Optional[_EntityT]:
        """Remove an entity from this store.

        Returns
        -------
        _EntityT | None
            The removed entity if it was stored.
        """
        return self._data.pop(key, None)

    def upsert(
        self,
        key: _KeyT,
        /,
        *,
        create: collections.Callable[[], _EntityT],
        update: collections.Callable[[_EntityT], None],
    ) -> _EntityT:
        """Get-or-insert an entity, updating it if it was already stored.

        Parameters
        ----------
        key
            The entity's key.
        create
            Callback used to build the entity if it isn't stored yet.
        update
            Callback used to update the stored entity in-place.

        Returns
        -------
        _EntityT
            The stored entity.

            This will be the same object for every call with the same key.
        """
        if (entity := self._data.get(key)) is not None:
            update(entity)
            return entity

        entity = self._data[key] = create()
        return entity


class EntityCache(abc.ABC):
    """Shared caches of the entities which have process-wide identity (users and members)."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def members(self) -> EntityStore[MemberKey, entities.Member]:
        """Store of the cached members keyed by `(guild_id, user_id)`."""

    @property
    @abc.abstractmethod
    def users(self) -> EntityStore[hikari.Snowflake, entities.User]:
        """Store of the cached users."""

    def get_member(
        self, guild_id: typing.Optional[hikari.Snowflakeish], user_id: hikari.Snowflakeish, /
    ) -> typing.Optional[entities.Member]:
        """Get a cached member.

        Pass [None][] for `guild_id` to get a member which was received without its guild's ID.
        """
        guild_id = hikari.Snowflake(guild_id) if guild_id is not None else None
        return self.members.get((guild_id, hikari.Snowflake(user_id)))

    def get_user(self, user_id: hikari.Snowflakeish, /) -> typing.Optional[entities.User]:
        """Get a cached user."""
        return self.users.get(hikari.Snowflake(user_id))

    def upsert_member(
        self,
        payload: _internal.RawPayload,
        /,
        *,
        user: entities.User,
        guild_id: typing.Optional[hikari.Snowflake],
        guild: typing.Optional[entities.Guild] = None,
    ) -> entities.Member:
        """Get-or-insert a member and update it from `payload`.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If the payload is malformed. The cache isn't modified in this case.
        """
        return self.members.upsert(
            (guild_id, user.id),
            create=lambda: entities.Member.from_payload(payload, user=user, guild_id=guild_id, guild=guild),
            update=lambda member: member.update(payload, guild=guild),
        )

    def upsert_user(self, payload: _internal.RawPayload, /) -> entities.User:
        """Get-or-insert a user and update it from `payload`.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If the payload is malformed. The cache isn't modified in this case.
        """
        user_id = _internal.get_field(payload, "id", "user", convert=hikari.Snowflake)
        return self.users.upsert(
            user_id, create=lambda: entities.User.from_payload(payload), update=lambda user: user.update(payload)
        )


class GuildRegistry(abc.ABC):
    """Registry of the guilds known to the current process."""

    __slots__ = ()

    @abc.abstractmethod
    def get_guild(self, guild_id: hikari.Snowflakeish, /) -> typing.Optional[entities.Guild]:
        """Look up a guild.

        Returns
        -------
        kotae.entities.Guild | None
            The guild if it's known, else [None][].
        """


class MemoryCache(EntityCache, GuildRegistry):
    """In-memory entity cache and guild registry."""

    __slots__ = ("_guilds", "_members", "_users")

    def __init__(self) -> None:
        self._guilds: dict[hikari.Snowflake, entities.Guild] = {}
        self._members: EntityStore[MemberKey, entities.Member] = EntityStore()
        self._users: EntityStore[hikari.Snowflake, entities.User] = EntityStore()

    @property
    def members(self) -> EntityStore[MemberKey, entities.Member]:
        # <<inherited docstring from EntityCache>>.
        return self._members

    @property
    def users(self) -> EntityStore[hikari.Snowflake, entities.User]:
        # <<inherited docstring from EntityCache>>.
        return self._users

    def add_guild(self, guild: typing.Union[entities.Guild, _internal.RawPayload], /) -> entities.Guild:
        """Register a guild.

        Parameters
        ----------
        guild
            The guild or its raw JSON payload.

        Returns
        -------
        kotae.entities.Guild
            The registered guild.
        """
        if not isinstance(guild, entities.Guild):
            guild = entities.Guild.from_payload(guild)

        self._guilds[guild.id] = guild
        _LOGGER.debug("Registered guild %s", guild.id)
        return guild

    def clear(self) -> None:
        """Clear all the cached guilds, members and users."""
        self._guilds.clear()
        self._members.clear()
        self._users.clear()

    def get_guild(self, guild_id: hikari.Snowflakeish, /) -> typing.Optional[entities.Guild]:
        # <<inherited docstring from GuildRegistry>>.
        return self._guilds.get(hikari.Snowflake(guild_id))

    def remove_guild(self, guild_id: hikari.Snowflakeish, /) -> typing.Optional[entities.Guild]:
        """Remove a guild and its cached members.

        Returns
        -------
        kotae.entities.Guild | None
            The removed guild if it was registered.
        """
        guild_id = hikari.Snowflake(guild_id)
        for key in [key for key in self._members if key[0] == guild_id]:
            self._members.remove(key)

        return self._guilds.pop(guild_id, None)
