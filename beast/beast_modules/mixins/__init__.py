"""Mixin package -- runtime-registered chain verbs."""
from beast.beast_modules.mixins.registry import MixinRegistry
from beast.beast_modules.mixins.types import MixinFunction, MixinSpec

__all__ = [
    "MixinFunction",
    "MixinRegistry",
    "MixinSpec",
]
