"""Description client and case formatting implementations."""

import logging
import string

import openai

from .constants import (
    DEFAULT_MODEL,
    DESCRIPTION_MAX_TOKENS,
    DESCRIPTION_PROMPT,
    DESCRIPTION_TEMPERATURE,
    MAX_FILENAME_LENGTH,
    OPENROUTER_BASE_URL,
    REQUEST_TIMEOUT_SECONDS,
)
from .core import (
    CaseFormatter,
    CasingFormat,
    DescribeError,
    DescriptionClient,
    EncodedImage,
    format_api_error,
)

logger = logging.getLogger(__name__)


class OpenRouterDescriptionClient(DescriptionClient):
    """Describes images through OpenRouter's OpenAI-compatible API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        client: openai.AsyncOpenAI | None = None,
    ):
        # Retries are disabled: a single failed attempt fails the file.
        self.client = client or openai.AsyncOpenAI(
            api_key=api_key,
            base_url=OPENROUTER_BASE_URL,
            timeout=REQUEST_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self.model = model

    async def describe(self, image: EncodedImage) -> str:
        """Request a short filename-style description of the image."""
        logger.debug(
            "Requesting description from %s (%s)", self.model, image.media_type
        )
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self._create_messages(image),
                max_tokens=DESCRIPTION_MAX_TOKENS,
                temperature=DESCRIPTION_TEMPERATURE,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except openai.OpenAIError as e:
            raise DescribeError(format_api_error(e)) from e

        content = self._extract_content(response)
        if not content:
            raise DescribeError("Response contained no description text")

        logger.debug("Description received: %r", content)
        return content

    def _create_messages(self, image: EncodedImage) -> list[dict]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": DESCRIPTION_PROMPT},
                    {"type": "image_url", "image_url": {"url": image.data_url}},
                ],
            }
        ]

    def _extract_content(self, response) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            return ""
        return content.strip()


class CaseFormatterImpl(CaseFormatter):
    """Implementation of case formatting."""

    def format(self, text: str, casing: CasingFormat) -> str:
        """Format text according to casing, trimmed and length-capped."""
        words = self._split_words(text)

        formatters = {
            CasingFormat.SNAKE: self._to_snake_case,
            CasingFormat.KEBAB: self._to_kebab_case,
            CasingFormat.PASCAL: self._to_pascal_case,
            CasingFormat.CAMEL: self._to_camel_case,
            CasingFormat.CAPITAL: self._to_capital_case,
            CasingFormat.LOWERCASE: self._to_lower_case,
            CasingFormat.SENTENCE: self._to_sentence_case,
        }

        formatter = formatters.get(casing, self._to_snake_case)
        return formatter(words).strip()[:MAX_FILENAME_LENGTH].rstrip()

    def _split_words(self, text: str) -> list[str]:
        """Split text into words.

        Anything that is not a letter or ASCII digit separates words. Inside a
        run, "carPhoto" splits before the upper-case letter and "HTMLPage"
        splits before the last capital of the acronym.
        """
        words = []
        current = ""
        for i, char in enumerate(text):
            if not (char.isalpha() or char in string.digits):
                if current:
                    words.append(current)
                    current = ""
                continue

            if current and char.isupper():
                prev = current[-1]
                following = text[i + 1] if i + 1 < len(text) else ""
                if prev.islower() or prev.isdigit():
                    words.append(current)
                    current = ""
                elif prev.isupper() and following.islower():
                    words.append(current)
                    current = ""
            current += char

        if current:
            words.append(current)
        return words

    def _capitalize(self, word: str, index: int) -> str:
        # Digit-led words after the first keep an underscore so that
        # "version 2 3" does not collapse into "Version23".
        if index > 0 and word[0].isdigit():
            return "_" + word[0] + word[1:].lower()
        return word[0].upper() + word[1:].lower()

    def _to_snake_case(self, words: list[str]) -> str:
        return "_".join(word.lower() for word in words)

    def _to_kebab_case(self, words: list[str]) -> str:
        return "-".join(word.lower() for word in words)

    def _to_pascal_case(self, words: list[str]) -> str:
        return "".join(self._capitalize(word, i) for i, word in enumerate(words))

    def _to_camel_case(self, words: list[str]) -> str:
        return "".join(
            word.lower() if i == 0 else self._capitalize(word, i)
            for i, word in enumerate(words)
        )

    def _to_capital_case(self, words: list[str]) -> str:
        return " ".join(word[0].upper() + word[1:].lower() for word in words)

    def _to_lower_case(self, words: list[str]) -> str:
        return " ".join(word.lower() for word in words)

    def _to_sentence_case(self, words: list[str]) -> str:
        return " ".join(
            word[0].upper() + word[1:].lower() if i == 0 else word.lower()
            for i, word in enumerate(words)
        )
