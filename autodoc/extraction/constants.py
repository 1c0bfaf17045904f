"""Markdown snippets shared by the extraction pipeline."""

from __future__ import annotations

DEFAULT_FENCE_LANGUAGE = "javascript"

FENCE = "```"

TOP_ANCHOR = '<a name="__top"></a>\n\n'
TOP_LINK = "\n<sub><sup>[&uarr;Top](#__top)</sup></sub>"
HOME_LINK = "<sub><sup>[&larr;Home](index.md)</sup></sub>\n\n"
BACK_LINK = "\n<sub><sup>[Back](../index.md)</sup></sub>\n"

INDEX_PAGE = "index.md"
