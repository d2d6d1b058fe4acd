"""Tests for generated document helpers."""

from hayat_ai.services.documents import DEFAULT_FILENAME, generate_filename, strip_code_fence


class TestStripCodeFence:
    """Tests for strip_code_fence."""

    def test_html_fence(self):
        raw = "```html\n<!DOCTYPE html>\n<html><body>Hi</body></html>\n```"
        result = strip_code_fence(raw)
        assert result.startswith("<!DOCTYPE html>")
        assert "```" not in result
        assert result == "<!DOCTYPE html>\n<html><body>Hi</body></html>"

    def test_plain_fence(self):
        raw = "```\n<!DOCTYPE html><html></html>\n```"
        assert strip_code_fence(raw) == "<!DOCTYPE html><html></html>"

    def test_fence_with_surrounding_whitespace(self):
        raw = "\n\n  ```html\n<!DOCTYPE html>\n```  \n"
        assert strip_code_fence(raw) == "<!DOCTYPE html>"

    def test_no_fence_is_trimmed_only(self):
        raw = "   <!DOCTYPE html>\n<p>```inline```</p>\n  "
        assert strip_code_fence(raw) == "<!DOCTYPE html>\n<p>```inline```</p>"

    def test_missing_closing_fence(self):
        assert strip_code_fence("```html\n<!DOCTYPE html>") == "<!DOCTYPE html>"

    def test_empty(self):
        assert strip_code_fence("") == ""


class TestGenerateFilename:
    """Tests for generate_filename."""

    def test_first_five_words(self):
        assert generate_filename("A Simple To-Do List App, with dark mode!") == "a-simple-todo-list-app.html"

    def test_collapses_whitespace(self):
        assert generate_filename("  Pomodoro   timer\tapp ") == "pomodoro-timer-app.html"

    def test_deterministic(self):
        prompt = "Weather dashboard for 3 cities"
        assert generate_filename(prompt) == generate_filename(prompt)

    def test_empty_prompt_uses_default(self):
        assert generate_filename("") == DEFAULT_FILENAME == "ai-generated-app.html"

    def test_punctuation_only_uses_default(self):
        assert generate_filename("!!! ???") == DEFAULT_FILENAME

    def test_keeps_underscores_and_digits(self):
        assert generate_filename("snake_case 2048 game") == "snake_case-2048-game.html"
