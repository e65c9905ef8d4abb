"""
Article prompt construction.

The prompt is assembled in a fixed order so identical inputs always produce
an identical string:

1. base instruction (word count, topic, niche)
2. tone clause
3. "Writing Style" block, one line per set field
4. additional instructions
5. output format instruction (TITLE: / CONTENT: markers)
"""

from typing import Optional

from core.domain.content import DEFAULT_TONE, DEFAULT_WORD_COUNT
from core.domain.writing_style import WritingStyle

# (field name, label) in emission order
STYLE_LINES = (
    ("voice", "Voice"),
    ("complexity", "Complexity"),
    ("structure", "Structure"),
    ("examples", "Include examples"),
    ("quotes", "Include quotes"),
    ("call_to_action", "Call to action"),
)

OUTPUT_FORMAT_INSTRUCTION = (
    "\n\nFormat the response as follows:\n"
    "TITLE: [Your article title here]\n\n"
    "CONTENT:\n"
    "[Your article content here]\n\n"
    "Make sure the content is engaging, informative, and well-structured with proper "
    "paragraphs, headings, and bullet points where appropriate."
)


def _format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _style_block(style: WritingStyle) -> str:
    lines = [
        f"\n- {label}: {_format_value(getattr(style, name))}"
        for name, label in STYLE_LINES
        if getattr(style, name) is not None
    ]
    if not lines:
        return ""
    return "\n\nWriting Style:" + "".join(lines)


def build_article_prompt(
    topic: str,
    niche: str,
    writing_style: Optional[WritingStyle] = None,
    tone: Optional[str] = DEFAULT_TONE,
    word_count: int = DEFAULT_WORD_COUNT,
    custom_prompt: Optional[str] = None,
) -> str:
    """
    Build the generation prompt for an article.

    Args:
        topic: What the article is about
        niche: Content category
        writing_style: Already-merged style (request fields over stored fields)
        tone: Tone clause; omitted when empty
        word_count: Target length in words
        custom_prompt: Free-text instructions from the request

    Returns:
        Prompt text
    """
    style = writing_style or WritingStyle()

    prompt = f'Write a {word_count}-word article about "{topic}" in the {niche} niche.'

    if tone:
        prompt += f"\n\nTone: Write in a {tone} tone."

    prompt += _style_block(style)

    instructions = [
        text.strip()
        for text in (style.custom_instructions, custom_prompt)
        if text and text.strip()
    ]
    if instructions:
        prompt += f"\n\nAdditional Instructions: {' '.join(instructions)}"

    prompt += OUTPUT_FORMAT_INSTRUCTION
    return prompt
