# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import asyncio
from collections.abc import Sequence
from typing import Any, Optional, Protocol, cast

import httpx

from metacap.console import console
from metacap.exceptions import TranslateError
from metacap.ratelimit import RateLimiter
from metacap.record import Record

TRANSLATED_FIELDS = ("title", "plot")

PROMPT = (
    "You are a translator. Translate the user's text into {language}. "
    "Reply with the translation only, without quotes or explanations."
)


class Translator(Protocol):
    name: str

    async def translate(self, text: str) -> str: ...


class OpenAITranslator:
    """Any OpenAI compatible chat completions endpoint (OpenAI, DeepSeek, ...)."""

    def __init__(self, base: str, model: str, key: str, language: str = "Simplified Chinese", timeout: float = 60.0, proxy: Optional[str] = None, name: str = "openai") -> None:
        self.name = name
        self.url = f"{base.rstrip('/')}/chat/completions"
        self.model = model
        self.language = language
        self.limiter = RateLimiter(capacity=1, interval=2)
        self.session = httpx.AsyncClient(headers={"Authorization": f"Bearer {key}"}, timeout=timeout, proxy=proxy)

    async def translate(self, text: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": PROMPT.format(language=self.language)},
                {"role": "user", "content": text},
            ],
        }
        await self.limiter.acquire()
        try:
            response = await self.session.post(self.url, json=payload)
            response.raise_for_status()
            data = cast(dict[str, Any], response.json())
            content = str(data["choices"][0]["message"]["content"]).strip()
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslateError(f"{self.name}: {e}") from e
        if not content:
            raise TranslateError(f"{self.name}: empty translation")
        return content

    async def close(self) -> None:
        await self.session.aclose()


class DeepLTranslator:
    def __init__(self, key: str, target_lang: str = "ZH", timeout: float = 60.0, proxy: Optional[str] = None) -> None:
        self.name = "deepl"
        # free plan keys end in ":fx" and live on a separate host
        host = "api-free.deepl.com" if key.endswith(":fx") else "api.deepl.com"
        self.url = f"https://{host}/v2/translate"
        self.target_lang = target_lang
        self.limiter = RateLimiter(capacity=1, interval=2)
        self.session = httpx.AsyncClient(headers={"Authorization": f"DeepL-Auth-Key {key}"}, timeout=timeout, proxy=proxy)

    async def translate(self, text: str) -> str:
        await self.limiter.acquire()
        try:
            response = await self.session.post(self.url, data={"text": text, "target_lang": self.target_lang})
            response.raise_for_status()
            data = cast(dict[str, Any], response.json())
            content = str(data["translations"][0]["text"]).strip()
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslateError(f"{self.name}: {e}") from e
        if not content:
            raise TranslateError(f"{self.name}: empty translation")
        return content

    async def close(self) -> None:
        await self.session.aclose()


def build_translators(config: dict[str, Any]) -> list[Translator]:
    default = cast(dict[str, Any], config.get("DEFAULT", {}))
    timeout = float(default.get("timeout", 60))
    proxy = default.get("proxy") or None
    translators: list[Translator] = []
    for entry in cast(list[dict[str, Any]], config.get("TRANSLATORS", []) or []):
        kind = str(entry.get("type", "")).lower()
        if kind in ("openai", "deepseek"):
            translators.append(OpenAITranslator(
                base=str(entry.get("base", "https://api.deepseek.com" if kind == "deepseek" else "https://api.openai.com/v1")),
                model=str(entry.get("model", "deepseek-chat" if kind == "deepseek" else "gpt-4o-mini")),
                key=str(entry.get("key", "")),
                language=str(entry.get("language", "Simplified Chinese")),
                timeout=timeout,
                proxy=proxy,
                name=kind,
            ))
        elif kind == "deepl":
            translators.append(DeepLTranslator(
                key=str(entry.get("key", "")),
                target_lang=str(entry.get("target_lang", "ZH")),
                timeout=timeout,
                proxy=proxy,
            ))
        else:
            console.print(f"[yellow]Unknown translator type '{kind}', ignored[/yellow]")
    return translators


class TranslationManager:
    def __init__(self, translators: Sequence[Translator], debug: bool = False) -> None:
        self.translators = list(translators)
        self.debug = debug

    @property
    def enabled(self) -> bool:
        return bool(self.translators)

    async def translate_text(self, text: str) -> Optional[str]:
        """First successful translation, or None when every translator failed."""
        for translator in self.translators:
            try:
                return await translator.translate(text)
            except TranslateError as e:
                console.print(f"[yellow]Translation with {translator.name} failed: {e}[/yellow]")
            except Exception as e:
                console.print(f"[red]Unexpected error from translator {translator.name}: {e}[/red]")
        return None

    async def translate_record(self, record: Record) -> Record:
        """Translate title and plot in place; failures leave the field as it was."""
        if not self.translators:
            return record

        async def translate_field(name: str) -> None:
            original = cast(str, getattr(record, name))
            if not original:
                return
            translated = await self.translate_text(original)
            if translated is None:
                console.print(f"[yellow]{record.id}: keeping untranslated {name}[/yellow]")
                return
            setattr(record, name, translated)
            if self.debug:
                console.print(f"[cyan]{record.id}: {name} -> {translated}[/cyan]")

        await asyncio.gather(*[translate_field(name) for name in TRANSLATED_FIELDS])
        return record

    async def close(self) -> None:
        for translator in self.translators:
            close = getattr(translator, "close", None)
            if close is not None:
                await close()
