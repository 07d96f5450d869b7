"""
Word Translation Service - imports machine translations for a stored word

The import for one source word:
1. Ask the translation service for translations of the word, its definitions and examples
2. Validate the response against the known dictionary entities (before any write)
3. Upsert the translated word and link it to the source word with a translation edge
4. Attach the definition and example translations (deduplicated Translation rows)
5. Save the bundled Danish dictionary variants and attach their translations

Steps 3-5 run in one transaction: either everything is committed or nothing is.
Re-running an import with the same data adds no rows.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import db
from models.enums import LanguageCode, RelationshipType, SourceType
from models.word import Word, WordDetails, WordDefinition
from services.danish_word_service import process_danish_variants
from services.dictionary_validator import DictionaryValidationError, validate_translation_payload
from services.payload_models import TranslationCombinedResponse, TranslationRequest
from services.transaction_utils import apply_transaction_timeouts, is_transaction_conflict
from services.translation_client import TranslationClient
from services import translation_repository as repository

logger = logging.getLogger(__name__)

TRANSLATION_SOURCE = SourceType.helsinki_nlp


class ImportResult:
    """Summary of one translation import."""

    def __init__(self, word_id: int, word: str):
        self.word_id = word_id
        self.word = word
        self.translated_word_id = None
        self.variant_word_ids = []
        self.definition_translations = 0
        self.example_translations = 0
        self.skipped_definitions = 0
        self.skipped_expressions = 0
        self.conflict = False

    def add_counts(self, counts: Dict[str, Any]):
        self.variant_word_ids.extend(counts.get('variant_word_ids', []))
        self.definition_translations += counts.get('definition_translations', 0)
        self.example_translations += counts.get('example_translations', 0)
        self.skipped_expressions += counts.get('skipped_expressions', 0)

    def to_dict(self):
        return {
            'word_id': self.word_id,
            'word': self.word,
            'translated_word_id': self.translated_word_id,
            'variant_word_ids': self.variant_word_ids,
            'definition_translations': self.definition_translations,
            'example_translations': self.example_translations,
            'skipped_definitions': self.skipped_definitions,
            'skipped_expressions': self.skipped_expressions,
            'conflict': self.conflict,
        }

    def __repr__(self):
        return f'<ImportResult word_id={self.word_id} conflict={self.conflict}>'


def build_word_data(word_id: int, session: Optional[Session] = None) -> Optional[Dict[str, Any]]:
    """
    Load the source payload of a stored word: phonetic, stems and definitions with examples.

    Args:
        word_id: Id of the source word
        session: Session to read with (defaults to the Flask-SQLAlchemy session)

    Returns:
        {'word', 'language_code', 'phonetic', 'stems', 'definitions': [{id, partOfSpeech,
        definition, examples: [{id, example}]}]} or None if the word does not exist
    """
    session = session or db.session
    word = session.get(Word, word_id)
    if word is None:
        return None

    stems = [
        relationship.to_word.word
        for relationship in repository.find_relationships(session, word.id, RelationshipType.stem)
    ]

    definitions = []
    seen = set()
    rows = (
        session.query(WordDetails, WordDefinition)
        .join(WordDefinition, WordDefinition.word_details_id == WordDetails.id)
        .filter(WordDetails.word_id == word.id)
        .order_by(WordDetails.id.asc(), WordDefinition.definition_id.asc())
        .all()
    )
    for details, link in rows:
        definition = link.definition
        if definition.id in seen:
            continue
        seen.add(definition.id)
        definitions.append({
            'id': definition.id,
            'partOfSpeech': details.part_of_speech.value,
            'definition': definition.definition,
            'examples': [
                {'id': example.id, 'example': example.example}
                for example in repository.get_definition_examples(session, definition.id)
            ],
        })

    return {
        'word': word.word,
        'language_code': word.language_code.value,
        'phonetic': word.phonetic_general,
        'stems': stems,
        'definitions': definitions,
    }


def upsert_translated_word(
    session: Session,
    text: str,
    language_code: LanguageCode,
    phonetic: Optional[str]
) -> Word:
    """Upsert the translated word: only its phonetic changes when it already exists."""
    return repository.upsert_word(
        session,
        text,
        language_code,
        create={
            'phonetic_general': phonetic,
            'etymology': None,
            'source_entity_id': TRANSLATION_SOURCE.value,
        },
        update={'phonetic_general': phonetic}
    )


def _translation_language(english_word_data: TranslationRequest) -> LanguageCode:
    try:
        return LanguageCode(english_word_data.metadata.language_code_translation)
    except ValueError:
        raise DictionaryValidationError(
            english_word_data.word.word,
            'languageCode_translation',
            english_word_data.metadata.language_code_translation
        )


def apply_english_word_data(
    session: Session,
    source_word_id: int,
    word_data: Dict[str, Any],
    english_word_data: TranslationRequest,
    result: ImportResult
):
    """
    Persist the translated word and its definition/example translations.

    Source examples are taken from `word_data` and paired by position with the
    translated examples of the same definition.
    """
    language_code = _translation_language(english_word_data)
    translated = english_word_data.word

    word_translation = translated.word_translation
    has_translation = bool(word_translation and isinstance(word_translation, str) and word_translation.strip())
    existing = repository.find_word(session, word_translation, language_code) if has_translation else None

    if not has_translation:
        logger.warning(f"No word translation returned for '{result.word}'")
    elif existing is not None and existing.id == source_word_id:
        # Same word in the same language
        logger.warning(f"Word translation of '{result.word}' is the word itself; skipped")
    else:
        translated_word = upsert_translated_word(
            session, word_translation, language_code, translated.phonetic_translation or None
        )
        result.translated_word_id = translated_word.id
        repository.upsert_relationship(session, source_word_id, translated_word.id, RelationshipType.translation)

    source_definitions = {definition['id']: definition for definition in word_data.get('definitions', [])}

    for translated_definition in english_word_data.definitions:
        source_definition = source_definitions.get(translated_definition.definition_id)
        if source_definition is None:
            logger.warning(
                f"Definition {translated_definition.definition_id} does not belong to '{result.word}'; skipped"
            )
            result.skipped_definitions += 1
            continue

        if repository.attach_definition_translation(
            session,
            source_definition['id'],
            translated_definition.definition_translation,
            language_code,
            TRANSLATION_SOURCE
        ):
            result.definition_translations += 1

        result.example_translations += repository.attach_example_translations(
            session,
            [example['id'] for example in source_definition.get('examples', [])],
            [example.example_translation for example in translated_definition.examples],
            language_code,
            TRANSLATION_SOURCE,
            f"'{result.word}' definition {source_definition['id']}"
        )


def parse_translation_response(payload: Dict[str, Any], word_text: str) -> TranslationCombinedResponse:
    """Validate a raw translation service element and parse it into models."""
    validate_translation_payload(payload, word_text)

    # An empty Danish object means the dictionary had no entry
    if not payload.get('translation_word_for_danish_dictionary'):
        payload = {**payload, 'translation_word_for_danish_dictionary': None}

    try:
        return TranslationCombinedResponse.model_validate(payload)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = '.'.join(str(part) for part in first_error['loc'])
        logger.error(f"Malformed translation data for word '{word_text}': {str(e)}")
        raise DictionaryValidationError(word_text, field, first_error.get('input'))


def process_translations_for_word(
    word_id: int,
    word_text: str,
    word_data: Dict[str, Any],
    client: Optional[TranslationClient] = None,
    session: Optional[Session] = None
) -> Optional[ImportResult]:
    """
    Import the machine translations of a word in one transaction.

    Args:
        word_id: Id of the source word
        word_text: Source word text
        word_data: {'phonetic', 'stems', 'definitions': [{id, partOfSpeech, definition,
            examples: [{id, example}]}]}, see build_word_data
        client: Translation service client (a default one is created when None)
        session: Session to run the import in (defaults to the Flask-SQLAlchemy session)

    Returns:
        ImportResult, or None if the translation service returned nothing

    Raises:
        DictionaryValidationError: If the response contains unknown entities (nothing is written)
        SQLAlchemyError: On any database error other than a transaction conflict
            (the import is rolled back)
    """
    client = client or TranslationClient()
    session = session or db.session

    payload = client.translate_word_data(
        word_id,
        word_text,
        word_data.get('phonetic'),
        word_data.get('definitions', []),
        word_data.get('stems', []),
        []
    )

    if not payload:
        logger.warning(f"No translation data returned for word: {word_text}")
        return None

    response = parse_translation_response(payload, word_text)

    if response.english_word_data is None and response.translation_word_for_danish_dictionary is None:
        logger.warning(f"No translation data returned for word: {word_text}")
        return None

    result = ImportResult(word_id, word_text)

    try:
        apply_transaction_timeouts(session)

        if response.english_word_data is not None:
            apply_english_word_data(session, word_id, word_data, response.english_word_data, result)

        result.add_counts(
            process_danish_variants(session, word_id, response.translation_word_for_danish_dictionary)
        )

        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        if is_transaction_conflict(e):
            logger.warning(f"Transaction conflict while importing translations for '{word_text}': {str(e)}")
            # Nothing was written, so report no ids or counts
            result = ImportResult(word_id, word_text)
            result.conflict = True
            return result
        logger.error(f"Error importing translations for '{word_text}': {str(e)}", exc_info=True)
        raise
    except Exception:
        session.rollback()
        raise

    logger.info(
        f"Imported translations for '{word_text}': translated_word_id={result.translated_word_id}, "
        f"{result.definition_translations} definition translations, "
        f"{result.example_translations} example translations, "
        f"{len(result.variant_word_ids)} variants"
    )
    return result


def import_translations_for_word_id(
    word_id: int,
    client: Optional[TranslationClient] = None,
    session: Optional[Session] = None
) -> Optional[ImportResult]:
    """
    Load a stored word and import its translations.

    Raises:
        LookupError: If the word does not exist
    """
    session = session or db.session
    word_data = build_word_data(word_id, session=session)
    if word_data is None:
        raise LookupError(f"Word {word_id} not found")

    return process_translations_for_word(word_id, word_data['word'], word_data, client=client, session=session)
