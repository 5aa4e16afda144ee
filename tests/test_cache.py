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

# pyright: reportPrivateUsage=none
# pyright: reportUnknownMemberType=none
# This leads to too many false-positives around mocks.

from unittest import mock

import hikari
import pytest

import kotae
from kotae import cache
from kotae import entities


class TestEntityStore:
    def test_upsert_creates(self):
        store: cache.EntityStore[int, object] = cache.EntityStore()
        entity = object()
        update = mock.Mock()

        result = store.upsert(1, create=lambda: entity, update=update)

        assert result is entity
        assert store.get(1) is entity
        assert 1 in store
        assert len(store) == 1
        update.assert_not_called()

    def test_upsert_updates_existing(self):
        store: cache.EntityStore[int, object] = cache.EntityStore()
        entity = object()
        store.upsert(1, create=lambda: entity, update=mock.Mock())
        create = mock.Mock()
        update = mock.Mock()

        result = store.upsert(1, create=create, update=update)

        assert result is entity
        create.assert_not_called()
        update.assert_called_once_with(entity)

    def test_remove(self):
        store: cache.EntityStore[int, object] = cache.EntityStore()
        entity = object()
        store.upsert(1, create=lambda: entity, update=mock.Mock())

        assert store.remove(1) is entity
        assert store.remove(1) is None
        assert list(store) == []

    def test_clear(self):
        store: cache.EntityStore[int, int] = cache.EntityStore()
        store.upsert(1, create=lambda: 1, update=mock.Mock())
        store.upsert(2, create=lambda: 2, update=mock.Mock())

        store.clear()

        assert len(store) == 0


class TestMemoryCache:
    def test_upsert_user_returns_same_object(self):
        memory_cache = cache.MemoryCache()

        user = memory_cache.upsert_user({"id": "123", "username": "old"})
        result = memory_cache.upsert_user({"id": "123", "username": "new"})

        assert result is user
        assert user.username == "new"
        assert memory_cache.get_user(123) is user

    def test_upsert_user_when_malformed(self):
        memory_cache = cache.MemoryCache()

        with pytest.raises(kotae.PayloadShapeError):
            memory_cache.upsert_user({"id": "123"})

        assert memory_cache.get_user(123) is None

    def test_upsert_member(self):
        memory_cache = cache.MemoryCache()
        user = memory_cache.upsert_user({"id": "123", "username": "meow"})

        member = memory_cache.upsert_member({"roles": []}, user=user, guild_id=hikari.Snowflake(456))
        result = memory_cache.upsert_member({"roles": ["5"]}, user=user, guild_id=hikari.Snowflake(456))

        assert result is member
        assert member.role_ids == [5]
        assert memory_cache.get_member(456, 123) is member
        assert memory_cache.get_member(789, 123) is None

    def test_add_guild_from_payload(self):
        memory_cache = cache.MemoryCache()

        guild = memory_cache.add_guild({"id": "456", "name": "guild"})

        assert isinstance(guild, entities.Guild)
        assert memory_cache.get_guild(456) is guild

    def test_add_guild(self):
        memory_cache = cache.MemoryCache()
        guild = entities.Guild(id=hikari.Snowflake(456), name="guild")

        assert memory_cache.add_guild(guild) is guild
        assert memory_cache.get_guild("456") is guild

    def test_remove_guild_removes_its_members(self):
        memory_cache = cache.MemoryCache()
        memory_cache.add_guild({"id": "456", "name": "guild"})
        user = memory_cache.upsert_user({"id": "123", "username": "meow"})
        memory_cache.upsert_member({"roles": []}, user=user, guild_id=hikari.Snowflake(456))
        other = memory_cache.upsert_member({"roles": []}, user=user, guild_id=hikari.Snowflake(789))

        result = memory_cache.remove_guild(456)

        assert result
        assert result.id == 456
        assert memory_cache.get_guild(456) is None
        assert memory_cache.get_member(456, 123) is None
        assert memory_cache.get_member(789, 123) is other
        assert memory_cache.get_user(123) is user

    def test_clear(self):
        memory_cache = cache.MemoryCache()
        memory_cache.add_guild({"id": "456", "name": "guild"})
        user = memory_cache.upsert_user({"id": "123", "username": "meow"})
        memory_cache.upsert_member({"roles": []}, user=user, guild_id=hikari.Snowflake(456))

        memory_cache.clear()

        assert memory_cache.get_guild(456) is None
        assert len(memory_cache.users) == 0
        assert len(memory_cache.members) == 0
