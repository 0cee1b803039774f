"""Codec infrastructure package."""

from .json_codec import JsonCodec

__all__ = ['JsonCodec']
