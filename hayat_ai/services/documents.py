"""Helpers for generated HTML documents."""

import re

DEFAULT_FILENAME = "ai-generated-app.html"

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)


def strip_code_fence(raw: str) -> str:
    """
    Remove a single markdown code fence wrapped around model output.

    ```html ... ``` and ``` ... ``` are unwrapped; anything else is only trimmed.
    """
    text = raw.strip()
    for opener in ("```html", "```"):
        if text.startswith(opener):
            text = text[len(opener):]
            if text.endswith("```"):
                text = text[:-3]
            return text.strip()
    return text


def generate_filename(prompt: str) -> str:
    """
    Derive a download filename from the app description.

    Lowercased, punctuation removed, first five words joined with hyphens.
    """
    if not prompt:
        return DEFAULT_FILENAME
    words = _PUNCTUATION.sub("", prompt.lower()).split()
    sanitized = "-".join(words[:5])
    return f"{sanitized}.html" if sanitized else DEFAULT_FILENAME
