"""Prompt template for asking the model for a slide outline."""

from doctor_slides.services.outline_parser import (
    BULLET_PREFIX,
    END_MARKER,
    IMAGE_PREFIX,
    START_MARKER,
    TITLE_PREFIX,
)

MIN_SLIDES = 3
MAX_SLIDES = 25

OUTLINE_PROMPT_TEMPLATE = f"""Please use the following document contents in order to build the outline of
a slideshow. The slideshow must have at least {MIN_SLIDES} slides, but can have up
to {MAX_SLIDES}. Each slide should have a title, at least two content bullet points,
and a url for an image. The outline should follow this format for each slide:

{START_MARKER}
{TITLE_PREFIX}The title of the slide here
{BULLET_PREFIX}example bullet point 1
{BULLET_PREFIX}example bullet point 2
{BULLET_PREFIX}example bullet point 3
{IMAGE_PREFIX}https://example.com/an-image-for-this-slide.png
{END_MARKER}

The document:
{{document}}"""


def build_outline_prompt(document_text: str) -> str:
    """Embed the document text in the outline instructions."""
    return OUTLINE_PROMPT_TEMPLATE.format(document=document_text)
