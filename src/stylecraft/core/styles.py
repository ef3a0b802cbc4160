"""Style presets and styled-prompt composition.

The user picks one style from a fixed list.  Before the prompt is sent to the
provider it is rewritten for that style:

- ``"default"`` leaves the prompt untouched.
- A known style wraps the prompt in a descriptive template.
- Any other style name appends a generic ``"in <style> style"`` suffix.

The prompt stored on the generation record is always the user's original
text; only the provider sees the composed version.

Usage
-----
::

    compose_prompt("a lighthouse at dusk", "watercolor")
    # 'Create a watercolor painting of a lighthouse at dusk. Use soft edges, ...'
"""

from __future__ import annotations

DEFAULT_STYLE = "default"

# (value, label) pairs in display order.
STYLES: list[tuple[str, str]] = [
    (DEFAULT_STYLE, "Default"),
    ("digital art", "Digital Art"),
    ("oil painting", "Oil Painting"),
    ("watercolor", "Watercolor"),
    ("anime", "Anime"),
    ("photorealistic", "Photorealistic"),
]

# Every template must contain ``{prompt}`` so the raw prompt survives verbatim.
STYLE_TEMPLATES: dict[str, str] = {
    "digital art": (
        "Create a digital art piece showing {prompt}. Use vibrant colors, dynamic "
        "composition, and modern digital art techniques."
    ),
    "oil painting": (
        "Create an oil painting of {prompt}. Use rich textures, classical composition, "
        "and traditional oil painting techniques."
    ),
    "watercolor": (
        "Create a watercolor painting of {prompt}. Use soft edges, delicate color washes, "
        "and the characteristic translucency of watercolor."
    ),
    "anime": (
        "Create an anime-style illustration of {prompt}. Use bold lines, expressive "
        "features, and characteristic anime aesthetics."
    ),
    "photorealistic": (
        "Create a photorealistic image of {prompt}. Use natural lighting, precise "
        "details, and photographic composition."
    ),
}

_GENERIC_SUFFIX = "{prompt} in {style} style"


def compose_prompt(prompt: str, style: str) -> str:
    """Return the prompt to send to the provider for ``style``.

    Args:
        prompt: The user's prompt text.
        style: Selected style value.

    Returns:
        ``prompt`` unchanged for the default style, otherwise a styled
        prompt that contains ``prompt`` as a substring.
    """
    if style == DEFAULT_STYLE:
        return prompt

    template = STYLE_TEMPLATES.get(style)
    if template is None:
        return _GENERIC_SUFFIX.format(prompt=prompt, style=style)
    return template.format(prompt=prompt)


def style_options() -> list[dict[str, str]]:
    """Return the style list in the shape the frontend expects."""
    return [{"value": value, "label": label} for value, label in STYLES]
