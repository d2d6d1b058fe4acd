"""Tests for the video prompt augmentation rule."""

import pytest

from hayat_ai.services.prompts import (
    ASPECT_RATIO_INSTRUCTIONS,
    WATERMARK_INSTRUCTION,
    append_instruction,
    augment_video_prompt,
    build_app_prompt,
)


class TestAppendInstruction:
    """Tests for the separator choice."""

    @pytest.mark.parametrize("prompt", ["A cat.", "A cat!", "A cat?", "  A cat.  "])
    def test_terminal_punctuation_uses_single_space(self, prompt):
        result = append_instruction(prompt, "Next.")
        assert result == f"{prompt.strip()} Next."

    @pytest.mark.parametrize("prompt", ["A cat", "A cat,", "A cat:", "  A cat  "])
    def test_other_endings_use_period_space(self, prompt):
        assert append_instruction(prompt, "Next.") == f"{prompt.strip()}. Next."


class TestAugmentVideoPrompt:
    """Tests for augment_video_prompt."""

    def test_landscape_without_punctuation(self):
        result = augment_video_prompt("A dog running on the beach", "16:9")
        assert result == (
            "A dog running on the beach. "
            "Generate a video in a cinematic, widescreen 16:9 aspect ratio. "
            + WATERMARK_INSTRUCTION
        )

    def test_portrait_with_punctuation(self):
        result = augment_video_prompt("A dog running on the beach!", "9:16")
        assert result == (
            "A dog running on the beach! "
            + ASPECT_RATIO_INSTRUCTIONS["9:16"]
            + " "
            + WATERMARK_INSTRUCTION
        )

    def test_ratio_instruction_comes_before_watermark(self):
        result = augment_video_prompt("City at night", "1:1")
        assert result.index(ASPECT_RATIO_INSTRUCTIONS["1:1"]) < result.index(WATERMARK_INSTRUCTION)

    @pytest.mark.parametrize("ratio", ["4:3", "3:4", "", "21:9"])
    def test_unknown_ratio_only_adds_watermark(self, ratio):
        assert augment_video_prompt("City at night", ratio) == f"City at night. {WATERMARK_INSTRUCTION}"

    def test_unknown_ratio_with_punctuation(self):
        assert augment_video_prompt("City at night?", "4:3") == f"City at night? {WATERMARK_INSTRUCTION}"

    def test_watermark_always_last(self):
        for ratio in ["16:9", "9:16", "1:1", "4:3"]:
            assert augment_video_prompt("Rain", ratio).endswith(WATERMARK_INSTRUCTION)


def test_build_app_prompt_quotes_description():
    prompt = build_app_prompt("a todo list")
    assert '"a todo list"' in prompt
    assert "<!DOCTYPE html>" in prompt
