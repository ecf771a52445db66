"""Adapter for the legacy CSV notice exports."""

from __future__ import annotations

from .extraction import PlainTextNoticeExtractor
from .formats import (
    DEFAULT_FORMATS,
    GOOGLE,
    SECONDARY_VARIANTS,
    TWITTER,
    LegacyFormat,
    PrimaryFormat,
    SecondaryFormat,
    TwitterFormat,
    YoutubeCounterfeitFormat,
    YoutubeDefamationFormat,
    YoutubeOtherLegalFormat,
    YoutubeTrademarkBFormat,
    YoutubeTrademarkDFormat,
)
from .mapper import AttributeMapper
from .schema import LegacyRow, parse_legacy_date
from .source import EXTRA_COLUMN, CsvRecordSource

__all__ = [
    "DEFAULT_FORMATS",
    "EXTRA_COLUMN",
    "GOOGLE",
    "SECONDARY_VARIANTS",
    "TWITTER",
    "AttributeMapper",
    "CsvRecordSource",
    "LegacyFormat",
    "LegacyRow",
    "PlainTextNoticeExtractor",
    "PrimaryFormat",
    "SecondaryFormat",
    "TwitterFormat",
    "YoutubeCounterfeitFormat",
    "YoutubeDefamationFormat",
    "YoutubeOtherLegalFormat",
    "YoutubeTrademarkBFormat",
    "YoutubeTrademarkDFormat",
    "parse_legacy_date",
]
