import logging
from typing import Optional

import aiohttp
import requests

logger = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL = "gpt-4o-mini"
TEMPERATURE = 0.5
MAX_TOKENS = 500

MOCK_SUMMARY_NO_KEY = "This is a mock summary because OpenAI API key is not provided."
MOCK_SUMMARY_FAILED = "This is a mock summary because OpenAI request failed."


class InputError(ValueError):
    """Raised when the summarizer is called without a transcript."""


def build_prompt(transcript: str, instruction: Optional[str] = "") -> str:
    if instruction:
        return (
            "Summarize the following transcript according to the instruction: "
            f"{instruction}\n\nTranscript:\n{transcript}"
        )
    return f"Summarize the following transcript:\n{transcript}"


def extract_content(data: dict) -> str:
    """Pull the single text choice out of a chat-completions response"""
    return data["choices"][0]["message"]["content"].strip()


class SummaryGenerator:
    """
    Summarizes meeting transcripts with the OpenAI chat-completions API.

    Built once at startup from the API key (or None). Without a key every call
    returns a mock summary; with a key, provider errors are logged and replaced
    by a mock summary so callers always get a string back.
    """

    def __init__(self, api_key: Optional[str] = None, api_url: str = OPENAI_CHAT_URL):
        self._api_key = api_key
        self._api_url = api_url
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _payload(prompt: str) -> dict:
        return {
            "model": OPENAI_MODEL,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    def _prompt_for(self, transcript: Optional[str], instruction: Optional[str]) -> Optional[str]:
        """
        Shared front half of generate / generate_sync.
        Raises InputError without a transcript; returns None when no API key is set.
        """
        if not transcript:
            raise InputError("Transcript required")

        prompt = build_prompt(transcript, instruction)
        return prompt if self.enabled else None

    @staticmethod
    def _request_failed(error: Exception) -> str:
        logger.error("OpenAI Error: %s", error)
        return MOCK_SUMMARY_FAILED

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the shared aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # ========================================================================
    # ASYNC VERSION (used by the HTTP handler)
    # ========================================================================

    async def _complete(self, prompt: str) -> dict:
        session = await self.get_session()
        async with session.post(
            self._api_url,
            headers=self._headers(),
            json=self._payload(prompt),
        ) as resp:
            resp.raise_for_status()
            return await resp.json()

    async def generate(self, transcript: Optional[str], instruction: Optional[str] = "") -> str:
        prompt = self._prompt_for(transcript, instruction)
        if prompt is None:
            return MOCK_SUMMARY_NO_KEY

        try:
            return extract_content(await self._complete(prompt))
        except Exception as e:
            return self._request_failed(e)

    # ========================================================================
    # SYNC VERSION (command line usage)
    # ========================================================================

    def _complete_sync(self, prompt: str) -> dict:
        resp = requests.post(
            self._api_url,
            headers=self._headers(),
            json=self._payload(prompt),
        )
        resp.raise_for_status()
        return resp.json()

    def generate_sync(self, transcript: Optional[str], instruction: Optional[str] = "") -> str:
        prompt = self._prompt_for(transcript, instruction)
        if prompt is None:
            return MOCK_SUMMARY_NO_KEY

        try:
            return extract_content(self._complete_sync(prompt))
        except Exception as e:
            return self._request_failed(e)


if __name__ == "__main__":
    # Command line usage: summarize a transcript file without running the server
    import os
    from dotenv import load_dotenv

    load_dotenv()

    filepath = input("Enter path to transcript file: ").strip()
    with open(filepath, "r", encoding="utf-8") as f:
        transcript = f.read()

    instruction = input("Instruction (optional): ").strip()

    generator = SummaryGenerator(os.getenv("OPENAI_API_KEY"))
    print("\n--- Summary ---\n")
    print(generator.generate_sync(transcript, instruction))
