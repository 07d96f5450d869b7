"""
Translation Service Pydantic Models

Structured models for the payloads exchanged with the dictionary translation service:
- English word data (TranslationRequest and its word/definition/example parts)
- Danish dictionary data (DanishDictionaryObject, WordVariant and their parts)
- The combined response (TranslationCombinedResponse)
"""

from .english_word_models import (
    TranslationMetadata,
    TranslationWord,
    TranslationExample,
    TranslationDefinition,
    TranslationRequest,
)
from .danish_dictionary_models import (
    DanishAudio,
    DanishWord,
    DanishDefinition,
    DanishFixedExpression,
    DanishStem,
    DanishComposition,
    WordVariant,
    DanishDictionaryObject,
    TranslationCombinedResponse,
)

__all__ = [
    'TranslationMetadata',
    'TranslationWord',
    'TranslationExample',
    'TranslationDefinition',
    'TranslationRequest',
    'DanishAudio',
    'DanishWord',
    'DanishDefinition',
    'DanishFixedExpression',
    'DanishStem',
    'DanishComposition',
    'WordVariant',
    'DanishDictionaryObject',
    'TranslationCombinedResponse',
]
