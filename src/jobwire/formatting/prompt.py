"""Formatting prompt templates."""

from __future__ import annotations

import json

REQUIRED_FIELDS = ("unique_id", "title", "content_html", "source", "source_link")

SYSTEM_PROMPT = """\
You are an editor for a recruitment news website. You turn raw job and \
recruitment notices into clear, accurate posts.

Rules:
- Use only facts present in the input. Never invent dates, fees, vacancy \
counts or links. Omit a section when the input has nothing for it.
- Write in plain, neutral language.
- Reply with a single JSON object and nothing else: no commentary, no \
markdown fences.\
"""

USER_PROMPT_TEMPLATE = """\
Rewrite the following notice as a structured post.

INPUT (JSON):
{record}

Return a JSON object with exactly these fields:
- "unique_id": a short stable identifier for this notice (prefer the URL slug \
or notice number)
- "title": a concise post title
- "content_html": the post body as HTML
- "source": the name of the publishing organisation or source
- "source_link": the original notice URL

The HTML body should include, when applicable:
1. A short introduction paragraph.
2. An "Important Dates" table (<table>) with event and date columns.
3. A "Vacancy Details" table with post name, number of posts and eligibility.
4. A "How to Apply" section with step-by-step instructions.
5. An "Important Links" list with the official notification and application \
links.

Use <h2> headings for each section.\
"""


def format_user_prompt(record: dict) -> str:
    """Embed the raw record as JSON in the user prompt."""
    return USER_PROMPT_TEMPLATE.format(
        record=json.dumps(record, ensure_ascii=False, indent=2),
    )
