"""
Dictionary Validator

Checks a raw translation service response against the whitelists of dictionary
entities the ingestion pipeline knows how to persist. Validation is fail-fast: the
first unknown value raises DictionaryValidationError, before any write happens.

Usage:
    from services.dictionary_validator import validate_translation_payload

    validate_translation_payload(raw_response, word_text='hund')
"""

import logging
from typing import Any, Dict, Iterable, Optional

from models.enums import PartOfSpeech
from services.danish_labels import DANISH_POS_MAP, DANISH_GENDER_MAP, STEM_POS_MAP

logger = logging.getLogger(__name__)


class DictionaryValidationError(ValueError):
    """Raised when a translation payload contains an entity outside the whitelists."""

    def __init__(self, word: str, field: str, value: Any):
        self.word = word
        self.field = field
        self.value = value
        super().__init__(f"Unknown {field} {value!r} in translation data for word '{word}'")


KNOWN_ROOT_FIELDS = {
    'metadata',
    'word',
    'definition',
    'fixed_expressions',
    'stems',
    'compositions',
    'synonyms',
    'synonyms_translation_en',
    'antonyms',
    'antonyms_translation_en',
    'variants',
    'related_words',
    'error',
}

KNOWN_ENGLISH_POS = {pos.value for pos in PartOfSpeech}

KNOWN_DANISH_POS = set(DANISH_POS_MAP)

# 'fælleskønellerintetkøn' is a valid gender tag that maps to no single Gender
KNOWN_GENDERS = set(DANISH_GENDER_MAP) | {'fælleskønellerintetkøn'}

KNOWN_STEM_POS = set(STEM_POS_MAP)

KNOWN_AUDIO_RELATIONSHIPS = {
    'grundform',
    'præsens',
    'præteritum',
    'præteritum participium',
    'præteritum og præteritum participium',
    'i sammensætning',
    'pluralis',
    'præteritum, betød',
    'syntes',
    'betydning 1',
    'betydning 2',
    'betydning 3',
    'betydning 1 og 6',
    'betydning 2 og 6',
    'betydning 3 og 6',
    'betydning 1, 2 og 6',
    'betydning 1, 2, 3 og 6',
    '',
}

KNOWN_LABELS = {
    'SPROGBRUG',
    'overført',
    'grammatik',
    'talemåde',
    'Forkortelse',
    'slang',
    'MEDICIN',
    'JURA',
    'TEKNIK',
    'KEMI',
    'MATEMATIK',
    'MUSIK',
    'SPORT',
    'BOTANIK',
    'ZOOLOGI',
    'ØKONOMI',
    'POLITIK',
    'RELIGION',
    'MILITÆR',
    'LITTERATUR',
    'ASTRONOMI',
    'GASTRONOMI',
    'SØFART',
    'Eksempler',
    'Se også',
    'Synonym',
    'Synonymer',
    'Antonym',
    'Antonymer',
    'som adverbium',
    'som adjektiv',
    'som substantiv',
    'som verbum',
    'som præposition',
    'som konjunktion',
    'som interjektion',
    'som talord',
    'som udråbsord',
    'som forkortelse',
}


def _check(word: str, field: str, value: Any, known: Iterable):
    if value not in known:
        logger.error(f"Unknown {field} in translation data for word '{word}': {value!r}")
        raise DictionaryValidationError(word, field, value)


def _check_labels(word: str, field: str, entries: Optional[list]):
    for entry in entries or []:
        labels = entry.get('labels') if isinstance(entry, dict) else None
        if isinstance(labels, dict):
            for label in labels:
                _check(word, field, label, KNOWN_LABELS)


def _check_variant_word(variant: Dict[str, Any], word: str):
    # Each variant is stored as a Word row
    word_data = variant.get('word')
    value = word_data.get('word') if isinstance(word_data, dict) else None
    if not isinstance(value, str) or not value.strip():
        logger.error(f"Missing variant word text in translation data for word '{word}': {value!r}")
        raise DictionaryValidationError(word, 'word', value)


def _validate_dictionary_entry(entry: Dict[str, Any], context_word: str):
    """Validate one Danish dictionary entry (the main object or one of its variants)."""
    word_data = entry.get('word') or {}
    word = word_data.get('word') or context_word

    part_of_speech = word_data.get('partOfSpeech') or []
    if isinstance(part_of_speech, list):
        if len(part_of_speech) > 0:
            _check(word, 'partOfSpeech', part_of_speech[0], KNOWN_DANISH_POS)
        if len(part_of_speech) > 1:
            _check(word, 'gender', part_of_speech[1], KNOWN_GENDERS)

    for audio in word_data.get('audio') or []:
        audio_word = audio.get('word') if isinstance(audio, dict) else None
        if isinstance(audio_word, str):
            _check(word, 'audio relationship', audio_word, KNOWN_AUDIO_RELATIONSHIPS)

    _check_labels(word, 'definition label', entry.get('definition'))
    _check_labels(word, 'fixed expression label', entry.get('fixed_expressions'))

    for stem in entry.get('stems') or []:
        stem_pos = stem.get('partOfSpeech') if isinstance(stem, dict) else None
        if isinstance(stem_pos, str) and stem_pos:
            _check(word, 'stem partOfSpeech', stem_pos, KNOWN_STEM_POS)


def validate_danish_dictionary(data: Optional[Dict[str, Any]], word_text: str):
    """
    Validate the `translation_word_for_danish_dictionary` part of a response.

    Args:
        data: Raw Danish dictionary object (may be None or empty)
        word_text: Source word the payload was requested for, used in error messages

    Raises:
        DictionaryValidationError: On the first unknown field, part of speech,
            gender, audio tag, label or stem part of speech, or on a variant
            without word text
    """
    if not data:
        return

    if not isinstance(data, dict):
        raise DictionaryValidationError(word_text, 'danish dictionary object', type(data).__name__)

    for key in data:
        _check(word_text, 'root field', key, KNOWN_ROOT_FIELDS)

    if data.get('word'):
        _validate_dictionary_entry(data, word_text)

    for variant in data.get('variants') or []:
        if isinstance(variant, dict):
            _check_variant_word(variant, word_text)
            _validate_dictionary_entry(variant, word_text)


def validate_english_word_data(data: Optional[Dict[str, Any]], word_text: str):
    """Validate the parts of speech of the translated definitions."""
    if not data:
        return

    for definition in data.get('definitions') or []:
        part_of_speech = definition.get('partOfSpeech') if isinstance(definition, dict) else None
        if part_of_speech:
            _check(word_text, 'definition partOfSpeech', part_of_speech, KNOWN_ENGLISH_POS)


def validate_translation_payload(payload: Dict[str, Any], word_text: str):
    """Validate a complete translation service response element."""
    validate_english_word_data(payload.get('english_word_data'), word_text)
    validate_danish_dictionary(payload.get('translation_word_for_danish_dictionary'), word_text)
