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
"""Response lifecycle management and entity resolution for Hikari application command interactions."""

from __future__ import annotations

__all__: list[str] = [
    "AckState",
    "AlreadyAcknowledgedError",
    "CommandClient",
    "CommandData",
    "CommandError",
    "CommandInteraction",
    "Config",
    "Context",
    "EmptyContentError",
    "InteractionIdentity",
    "KotaeError",
    "MemoryCache",
    "MessageResponse",
    "NotYetAcknowledgedError",
    "PayloadShapeError",
    "RESTRequestService",
    "RequestService",
    "ResolvedData",
    "Resolver",
    "ResponseController",
    "ResponsePath",
    "cache",
    "client",
    "commands",
    "config",
    "content",
    "entities",
    "errors",
    "interactions",
    "resolver",
    "rest",
]

__version__ = "0.1.0"

from . import cache
from . import client
from . import commands
from . import config
from . import content
from . import entities
from . import errors
from . import interactions
from . import resolver
from . import rest
from .cache import MemoryCache
from .client import CommandClient
from .client import CommandError
from .client import Context
from .commands import CommandData
from .config import Config
from .errors import AlreadyAcknowledgedError
from .errors import EmptyContentError
from .errors import KotaeError
from .errors import NotYetAcknowledgedError
from .errors import PayloadShapeError
from .interactions import AckState
from .interactions import CommandInteraction
from .interactions import InteractionIdentity
from .interactions import MessageResponse
from .interactions import ResponseController
from .interactions import ResponsePath
from .resolver import ResolvedData
from .resolver import Resolver
from .rest import RequestService
from .rest import RESTRequestService
