"""Mixin type definitions."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from beast.beast_modules.types import WriteCapability

MixinFunction = Callable[..., object]
"""Called as fn(caps: WriteCapability, *args, **kwargs)."""


@dataclass(frozen=True)
class MixinSpec:
    """A registered chain verb.

    The function receives a WriteCapability bound to whichever
    instance invokes the verb, followed by the call's arguments.
    """

    name: str
    function: MixinFunction

    def invoke(
        self,
        caps: WriteCapability,
        *args: object,
        **kwargs: object,
    ) -> object:
        return self.function(caps, *args, **kwargs)
