"""Fixed prompt text and the video prompt augmentation rule."""

PERSONA_INSTRUCTION = (
    "You are a helpful and creative AI assistant named Hayat Ai. "
    "Your creator is Hayat Khan. When asked who you are or who made you, "
    "mention you are powered by Hayat Khan."
)

ASPECT_RATIO_INSTRUCTIONS = {
    "16:9": "Generate a video in a cinematic, widescreen 16:9 aspect ratio.",
    "9:16": (
        "Generate a video in a vertical 9:16 aspect ratio, "
        "suitable for mobile platforms like TikTok or Reels."
    ),
    "1:1": "Generate a video in a square 1:1 aspect ratio.",
}

WATERMARK_INSTRUCTION = (
    "A small, subtle watermark text 'Hayat Ai' must be present "
    "in the lower-left corner of the video."
)

APP_PROMPT_TEMPLATE = """Generate a complete, single-file HTML web application based on the following description: "{description}".

The HTML file must be self-contained. All CSS must be inside a <style> tag in the <head>, and all JavaScript must be inside a <script> tag at the end of the <body>.
The application should be functional, responsive, and visually appealing using modern design principles.
Do not include any explanations, comments, or markdown fences like ```html. Just return the raw HTML code starting with <!DOCTYPE html>."""

TERMINAL_PUNCTUATION = (".", "!", "?")


def append_instruction(prompt: str, instruction: str) -> str:
    """Append a sentence, adding a period first unless the prompt already ends one."""
    text = prompt.strip()
    if text.endswith(TERMINAL_PUNCTUATION):
        return f"{text} {instruction}"
    return f"{text}. {instruction}"


def augment_video_prompt(prompt: str, aspect_ratio: str) -> str:
    """
    Add the aspect ratio and watermark instructions to a video prompt.

    Args:
        prompt: User prompt
        aspect_ratio: 16:9, 9:16 or 1:1 (anything else adds no ratio instruction)

    Returns:
        Prompt sent to the video model
    """
    augmented = prompt
    ratio_instruction = ASPECT_RATIO_INSTRUCTIONS.get(aspect_ratio)
    if ratio_instruction:
        augmented = append_instruction(augmented, ratio_instruction)
    return append_instruction(augmented, WATERMARK_INSTRUCTION)


def build_app_prompt(description: str) -> str:
    """Wrap an app description in the single-file HTML instructions."""
    return APP_PROMPT_TEMPLATE.format(description=description)
