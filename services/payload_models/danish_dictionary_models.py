"""
Danish Dictionary Pydantic Models

The `translation_word_for_danish_dictionary` part of a translation service response:
a Danish dictionary entry with English translations of its definitions, examples and
fixed expressions, optionally carrying further entries (variants) of the same headword.

Labels are kept as a free mapping; their keys are checked against the known label
whitelist by services.dictionary_validator before anything is persisted.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union
from .english_word_models import TranslationRequest

LabelValue = Union[List[str], bool, str]


class DanishAudio(BaseModel):
    audio_type: Optional[str] = None
    audio_url: str
    phonetic_audio: Optional[str] = None
    # Which form the recording belongs to, e.g. "grundform", "pluralis"
    word: Optional[str] = None


class DanishWord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word: str
    word_variants: Optional[List[str]] = None
    phonetic: Optional[str] = None
    # [part_of_speech] or [part_of_speech, gender], e.g. ["substantiv", "fælleskøn"]
    part_of_speech: List[str] = Field(default_factory=list, alias='partOfSpeech')
    forms: List[str] = Field(default_factory=list)
    contextual_forms: Optional[Dict[str, List[str]]] = None
    audio: List[DanishAudio] = Field(default_factory=list)
    etymology: Optional[str] = None
    colloquialism: List[str] = Field(default_factory=list)
    variant: str = ''
    variant_pos: str = ''


class SourceOfExample(BaseModel):
    short: str
    full: str


class DanishDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    definition: str
    definition_translation_en: Optional[str] = ''
    examples: List[str] = Field(default_factory=list)
    examples_translation_en: List[Optional[str]] = Field(default_factory=list)
    sources: List[SourceOfExample] = Field(default_factory=list)
    source_of_example: List[Optional[SourceOfExample]] = Field(default_factory=list, alias='sourceOfExample')
    labels: Dict[str, LabelValue] = Field(default_factory=dict)
    labels_translation_en: Dict[str, LabelValue] = Field(default_factory=dict)


class DanishFixedExpression(BaseModel):
    expression: str
    expression_translation_en: Optional[str] = ''
    expression_variants: List[str] = Field(default_factory=list)
    definition: str
    definition_translation_en: Optional[str] = ''
    examples: List[str] = Field(default_factory=list)
    examples_translation_en: List[Optional[str]] = Field(default_factory=list)
    sources: List[SourceOfExample] = Field(default_factory=list)
    labels: Dict[str, LabelValue] = Field(default_factory=dict)
    labels_translation_en: Dict[str, LabelValue] = Field(default_factory=dict)


class DanishStem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stem: str
    stem_translation_en: Optional[str] = ''
    part_of_speech: str = Field(default='', alias='partOfSpeech')


class DanishComposition(BaseModel):
    composition: str
    composition_translation_en: Optional[str] = ''


class WordVariant(BaseModel):
    """One dictionary entry (sense group / homograph) of a Danish headword."""
    word: DanishWord
    definition: List[DanishDefinition] = Field(default_factory=list)
    fixed_expressions: List[DanishFixedExpression] = Field(default_factory=list)
    stems: List[DanishStem] = Field(default_factory=list)
    compositions: List[DanishComposition] = Field(default_factory=list)
    synonyms: List[str] = Field(default_factory=list)
    synonyms_translation_en: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)
    antonyms_translation_en: List[str] = Field(default_factory=list)


class DanishDictionaryObject(WordVariant):
    # The top-level entry may be empty when everything lives in `variants`
    word: Optional[DanishWord] = None
    metadata: Optional[Dict[str, str]] = None
    variants: List[WordVariant] = Field(default_factory=list)
    related_words: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class TranslationCombinedResponse(BaseModel):
    """One element of the translation service response list."""
    english_word_data: Optional[TranslationRequest] = None
    translation_word_for_danish_dictionary: Optional[DanishDictionaryObject] = None
