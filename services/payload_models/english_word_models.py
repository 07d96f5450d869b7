"""
English Word Pydantic Models

The request sent to the translation service and the `english_word_data` part of its
response share one shape: the service fills the empty `*_translation` slots.

Example structure:
{
    "metadata": {"languageCode": "en", "languageCode_translation": "da", "sourceTranslator": "Helsinki-NLP"},
    "word": {"wordId": 1, "word": "dog", "word_translation": "hund", "phonetic_translation": "ˈhunˀ", ...},
    "definitions": [
        {"definitionId": 10, "partOfSpeech": "noun", "definition": "a domestic animal",
         "definition_translation": "et husdyr",
         "examples": [{"exampleId": 100, "example": "The dog barked.", "example_translation": "Hunden gøede."}]}
    ],
    "stems": ["dog"],
    "stems_translation": ["hund"]
}
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class TranslationMetadata(BaseModel):
    """Language pair and translator tag of a request."""
    model_config = ConfigDict(populate_by_name=True)

    language_code: str = Field(alias='languageCode', description="Language of the source word")
    language_code_translation: str = Field(alias='languageCode_translation',
                                           description="Language the service translates into")
    source_translator: str = Field(default='Helsinki-NLP', alias='sourceTranslator')


class TranslationWord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word_id: int = Field(alias='wordId')
    word: str
    word_variants: Optional[List[str]] = None
    phonetic: Optional[str] = None
    word_translation: str = ''
    phonetic_translation: Optional[str] = ''
    source_translator: str = Field(default='Helsinki-NLP', alias='sourceTranslator')
    related_words: List[dict] = Field(default_factory=list, alias='relatedWords')


class TranslationExample(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    example_id: int = Field(alias='exampleId')
    example: str
    example_translation: Optional[str] = ''
    source: Optional[str] = None


class TranslationDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    definition_id: int = Field(alias='definitionId')
    part_of_speech: str = Field(default='undefined', alias='partOfSpeech')
    definition: str
    definition_translation: Optional[str] = ''
    examples: List[TranslationExample] = Field(default_factory=list)


class TranslationRequest(BaseModel):
    """A word with its definitions and examples, with or without the translated slots filled."""
    model_config = ConfigDict(populate_by_name=True)

    metadata: TranslationMetadata
    word: TranslationWord
    definitions: List[TranslationDefinition] = Field(default_factory=list)
    stems: List[str] = Field(default_factory=list)
    stems_translation: List[Optional[str]] = Field(default_factory=list)
