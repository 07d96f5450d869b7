"""
Translation Repository - find-or-create primitives for dictionary rows

Every function takes the SQLAlchemy session of the running import as its first
argument and only flushes, never commits: the caller owns the transaction.
Lookups are exact matches on the natural key of each table, so repeated imports
of the same data reuse existing rows instead of adding new ones.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from models.definition import Definition, DefinitionExample
from models.enums import LanguageCode, PartOfSpeech, RelationshipType, SourceType, Gender
from models.translation import Translation, DefinitionTranslation, ExampleTranslation
from models.word import Word, WordDetails, WordDefinition
from models.word_relationship import WordToWordRelationship

logger = logging.getLogger(__name__)


def find_word(session: Session, text: str, language_code: LanguageCode) -> Optional[Word]:
    return session.query(Word).filter_by(word=text.strip(), language_code=language_code).first()


def upsert_word(
    session: Session,
    text: str,
    language_code: LanguageCode,
    create: Optional[Dict[str, Any]] = None,
    update: Optional[Dict[str, Any]] = None
) -> Word:
    """
    Get a word by (text, language) and update it, or create it.

    Args:
        session: Session of the running import
        text: Word text
        language_code: Language of the word
        create: Column values for a new row
        update: Column values to overwrite on an existing row (nothing when None)

    Returns:
        Word object with its id assigned
    """
    word = find_word(session, text, language_code)

    if word:
        for column, value in (update or {}).items():
            setattr(word, column, value)
        session.flush()
        logger.debug(f"Found existing word: {word.id} - '{text}' ({language_code.value})")
        return word

    word = Word(word=text, language_code=language_code, **(create or {}))
    session.add(word)
    session.flush()

    logger.debug(f"Created word: {word.id} - '{text}' ({language_code.value})")
    return word


def upsert_relationship(
    session: Session,
    from_word_id: int,
    to_word_id: int,
    relationship_type: RelationshipType,
    description: Optional[str] = None,
    order_index: Optional[int] = None
) -> WordToWordRelationship:
    """Get the (from, to, type) edge or create it. Existing edges are left untouched."""
    relationship = session.query(WordToWordRelationship).filter_by(
        from_word_id=from_word_id,
        to_word_id=to_word_id,
        type=relationship_type
    ).first()

    if relationship:
        return relationship

    relationship = WordToWordRelationship(
        from_word_id=from_word_id,
        to_word_id=to_word_id,
        type=relationship_type,
        description=description,
        order_index=order_index
    )
    session.add(relationship)
    session.flush()

    logger.debug(f"Created relationship {from_word_id} -{relationship_type.value}-> {to_word_id}")
    return relationship


def find_or_create_translation(
    session: Session,
    content: str,
    language_code: LanguageCode,
    source: SourceType
) -> Translation:
    """
    Get the translation with exactly this (content, language, source), or create it.

    There is no unique constraint on translations; this lookup is what keeps at
    most one row per identical text.
    """
    translation = session.query(Translation).filter_by(
        content=content,
        language_code=language_code,
        source=source
    ).first()

    if translation:
        logger.debug(f"Reusing translation {translation.id} ({language_code.value})")
        return translation

    translation = Translation(content=content, language_code=language_code, source=source)
    session.add(translation)
    session.flush()

    logger.debug(f"Created translation {translation.id} ({language_code.value})")
    return translation


def link_definition_translation(session: Session, definition_id: int, translation_id: int) -> DefinitionTranslation:
    link = session.query(DefinitionTranslation).filter_by(
        definition_id=definition_id,
        translation_id=translation_id
    ).first()

    if link:
        return link

    link = DefinitionTranslation(definition_id=definition_id, translation_id=translation_id)
    session.add(link)
    session.flush()
    return link


def link_example_translation(session: Session, example_id: int, translation_id: int) -> ExampleTranslation:
    link = session.query(ExampleTranslation).filter_by(
        example_id=example_id,
        translation_id=translation_id
    ).first()

    if link:
        return link

    link = ExampleTranslation(example_id=example_id, translation_id=translation_id)
    session.add(link)
    session.flush()
    return link


def upsert_word_details(
    session: Session,
    word_id: int,
    part_of_speech: Optional[PartOfSpeech],
    source: SourceType,
    variant: str = '',
    phonetic: Optional[str] = None,
    gender: Optional[Gender] = None,
    is_plural: bool = False
) -> WordDetails:
    """Get or create the (word, part of speech, variant) entry; phonetic and gender are refreshed when given."""
    part_of_speech = part_of_speech or PartOfSpeech.undefined

    details = session.query(WordDetails).filter_by(
        word_id=word_id,
        part_of_speech=part_of_speech,
        variant=variant or ''
    ).first()

    if details:
        if phonetic is not None:
            details.phonetic = phonetic
        if gender is not None:
            details.gender = gender
        details.is_plural = is_plural
        details.source = source
        session.flush()
        return details

    details = WordDetails(
        word_id=word_id,
        part_of_speech=part_of_speech,
        variant=variant or '',
        phonetic=phonetic,
        gender=gender,
        is_plural=is_plural,
        source=source
    )
    session.add(details)
    session.flush()
    return details


def upsert_definition(
    session: Session,
    text: str,
    language_code: LanguageCode,
    source: SourceType,
    subject_status_labels: Optional[str] = None,
    general_labels: Optional[str] = None,
    grammatical_note: Optional[str] = None,
    usage_note: Optional[str] = None
) -> Definition:
    definition = session.query(Definition).filter_by(
        definition=text,
        language_code=language_code,
        source=source
    ).first()

    if not definition:
        definition = Definition(definition=text, language_code=language_code, source=source)
        session.add(definition)

    definition.subject_status_labels = subject_status_labels
    definition.general_labels = general_labels
    definition.grammatical_note = grammatical_note
    definition.usage_note = usage_note
    session.flush()
    return definition


def link_word_definition(
    session: Session,
    word_details_id: int,
    definition_id: int,
    is_primary: bool = False
) -> WordDefinition:
    link = session.query(WordDefinition).filter_by(
        word_details_id=word_details_id,
        definition_id=definition_id
    ).first()

    if link:
        return link

    link = WordDefinition(word_details_id=word_details_id, definition_id=definition_id, is_primary=is_primary)
    session.add(link)
    session.flush()
    return link


def has_definition_for_pos(session: Session, word_details_id: int) -> bool:
    """Whether a word details entry already has any linked definition."""
    return session.query(WordDefinition).filter_by(word_details_id=word_details_id).first() is not None


def upsert_example(
    session: Session,
    definition_id: int,
    example: str,
    language_code: LanguageCode,
    grammatical_note: Optional[str] = None,
    source_of_example: Optional[str] = None
) -> DefinitionExample:
    row = session.query(DefinitionExample).filter_by(definition_id=definition_id, example=example).first()

    if not row:
        row = DefinitionExample(definition_id=definition_id, example=example, language_code=language_code)
        session.add(row)

    row.grammatical_note = grammatical_note
    if source_of_example is not None:
        row.source_of_example = source_of_example
    session.flush()
    return row


def find_word_definition_by_text(session: Session, word_id: int, definition_text: str) -> Optional[Definition]:
    """Find a definition linked to any entry of the word by its exact text."""
    return (
        session.query(Definition)
        .join(WordDefinition, WordDefinition.definition_id == Definition.id)
        .join(WordDetails, WordDetails.id == WordDefinition.word_details_id)
        .filter(WordDetails.word_id == word_id, Definition.definition == definition_text)
        .first()
    )


def get_definition_examples(session: Session, definition_id: int) -> list:
    """Examples of a definition in insertion order."""
    return (
        session.query(DefinitionExample)
        .filter_by(definition_id=definition_id)
        .order_by(DefinitionExample.id.asc())
        .all()
    )


def attach_definition_translation(
    session: Session,
    definition_id: int,
    content: Any,
    language_code: LanguageCode,
    source: SourceType
) -> bool:
    """
    Dedupe a translated definition string and link it to the definition.

    Returns:
        True if a link exists afterwards, False if the content was empty or not a string
    """
    if not content or not isinstance(content, str):
        return False

    translation = find_or_create_translation(session, content, language_code, source)
    link_definition_translation(session, definition_id, translation.id)
    return True


def attach_example_translations(
    session: Session,
    example_ids: List[Optional[int]],
    translations: List[Any],
    language_code: LanguageCode,
    source: SourceType,
    context: str
) -> int:
    """
    Pair examples with their translations by position and link each pair.

    Only the first min(len(example_ids), len(translations)) pairs are used; a
    length mismatch is logged as a warning naming the first unpaired index.
    Empty or non-string translations, and examples without an id, keep their
    position but are not linked.

    Args:
        session: Session of the running import
        example_ids: Ids of the source examples, in source order
        translations: Translated example strings, in the same order
        language_code: Language of the translations
        source: Source tag of the translations
        context: Word/definition description used in the warning

    Returns:
        Number of examples linked to a translation
    """
    pair_count = min(len(example_ids), len(translations))

    if len(example_ids) != len(translations):
        logger.warning(
            f"Example count mismatch for {context}: {len(example_ids)} examples, "
            f"{len(translations)} translations; index {pair_count} onward left untranslated"
        )

    linked = 0
    for example_id, content in zip(example_ids[:pair_count], translations[:pair_count]):
        if example_id is None or not content or not isinstance(content, str):
            continue
        translation = find_or_create_translation(session, content, language_code, source)
        link_example_translation(session, example_id, translation.id)
        linked += 1

    return linked


def find_relationships(
    session: Session,
    from_word_id: int,
    relationship_type: RelationshipType
) -> List[WordToWordRelationship]:
    return (
        session.query(WordToWordRelationship)
        .filter_by(from_word_id=from_word_id, type=relationship_type)
        .all()
    )
