from __future__ import annotations

"""
Language Processor Registry.

Maps the CLI language selector to a processor factory.
"""

from typing import Any, Callable, Dict, List

from fbsprocessor.domain.errors import UnsupportedLanguageError
from fbsprocessor.processors.base import FileOutcome, LanguageProcessor
from fbsprocessor.processors.go import GoProcessor

_PROCESSORS: Dict[str, Callable[..., LanguageProcessor]] = {
    "go": GoProcessor,
}


def available_languages() -> List[str]:
    return sorted(_PROCESSORS)


def get_processor(language: str, **options: Any) -> LanguageProcessor:
    """
    Instantiate the processor registered for a language.

    Raises:
        UnsupportedLanguageError: If no processor is registered for it.
    """
    factory = _PROCESSORS.get(language.lower())
    if factory is None:
        raise UnsupportedLanguageError(language, _PROCESSORS)
    return factory(**options)


__all__ = [
    "FileOutcome",
    "GoProcessor",
    "LanguageProcessor",
    "available_languages",
    "get_processor",
]
