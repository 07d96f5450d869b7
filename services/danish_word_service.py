"""
Danish Word Service - persists Danish dictionary entries and their English translations

process_and_save_danish_word stores one dictionary entry (a variant) with its details,
definitions, examples, word forms, stems, compositions, synonyms, antonyms and fixed
expressions. attach_variant_translations then links the English translations that the
translation service bundled with the entry.

All functions work inside the caller's transaction and never commit, except
process_danish_variant, which runs one variant as its own import.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import db
from models.enums import LanguageCode, PartOfSpeech, RelationshipType, SourceType
from models.word import Word, WordDetails
from services.danish_forms import transform_danish_forms
from services.danish_labels import (
    map_danish_pos,
    map_danish_gender,
    map_stem_pos,
    get_relationship_description,
    extract_usage_note,
    extract_grammatical_note,
    extract_general_labels,
    extract_subject_status_labels,
    label_list,
)
from services.dictionary_validator import DictionaryValidationError, validate_danish_dictionary
from services.payload_models import (
    DanishDefinition,
    DanishDictionaryObject,
    DanishFixedExpression,
    WordVariant,
)
from services.transaction_utils import apply_transaction_timeouts, is_transaction_conflict
from services import translation_repository as repository

logger = logging.getLogger(__name__)

DANISH = LanguageCode.da
ENGLISH = LanguageCode.en
DICTIONARY_SOURCE = SourceType.danish_dictionary
TRANSLATION_SOURCE = SourceType.helsinki_nlp

# Label keys holding lists of related words, and the relationship they create
LABEL_RELATIONSHIPS = {
    'Se også': RelationshipType.related,
    'Synonym': RelationshipType.synonym,
    'Synonymer': RelationshipType.synonym,
    'Antonym': RelationshipType.antonym,
    'Antonymer': RelationshipType.antonym,
}


def format_source_of_example(source) -> Optional[str]:
    """Citation markup stored in DefinitionExample.source_of_example."""
    if source is None:
        return None
    return f"{{bc}}short {{it}}{source.short}{{/it}} {{bc}}full {{it}}{source.full}{{/it}}"


def combine_examples(
    entry: Union[DanishDefinition, DanishFixedExpression]
) -> Tuple[List[str], List[Any], List[Optional[str]]]:
    """
    Collect an entry's examples in storage order with their translations and citations.

    Examples listed under the "Eksempler" label come first, followed by the regular
    examples. When the label has no translated counterpart, empty placeholders keep
    the regular translations aligned with their examples.

    Returns:
        (examples, translations, sources_of_example)
    """
    label_examples = label_list(entry.labels, 'Eksempler')
    examples = list(label_examples) + list(entry.examples)

    label_translations = label_list(entry.labels_translation_en, 'Eksempler')
    if label_examples and not label_translations:
        label_translations = ['' for _ in label_examples]
    translations = list(label_translations) + list(entry.examples_translation_en)

    regular_sources = getattr(entry, 'source_of_example', None) or []
    sources = [None for _ in label_examples]
    for index in range(len(entry.examples)):
        source = regular_sources[index] if index < len(regular_sources) else None
        sources.append(format_source_of_example(source))

    return examples, translations, sources


def _save_examples(session: Session, definition_id: int, examples: List[str], sources: List[Optional[str]]) -> List[int]:
    example_ids = []
    for example, source_of_example in zip(examples, sources):
        if not example:
            continue
        row = repository.upsert_example(
            session, definition_id, example, DANISH, source_of_example=source_of_example
        )
        example_ids.append(row.id)
    return example_ids


def _save_definition(
    session: Session,
    details: WordDetails,
    entry: Union[DanishDefinition, DanishFixedExpression]
):
    """Persist a definition with its label notes, link it to the details entry and store its examples."""
    is_primary = not repository.has_definition_for_pos(session, details.id)

    definition = repository.upsert_definition(
        session,
        entry.definition,
        DANISH,
        DICTIONARY_SOURCE,
        subject_status_labels=extract_subject_status_labels(entry.labels),
        general_labels=extract_general_labels(entry.labels),
        grammatical_note=extract_grammatical_note(entry.labels),
        usage_note=extract_usage_note(entry.labels)
    )
    repository.link_word_definition(session, details.id, definition.id, is_primary=is_primary)

    examples, _, sources = combine_examples(entry)
    _save_examples(session, definition.id, examples, sources)

    return definition


def _link_sub_word(
    session: Session,
    main_word: Word,
    text: str,
    part_of_speech: PartOfSpeech,
    relationship_types: List[RelationshipType],
    order_index: Optional[int] = None
) -> Optional[Word]:
    """Create a related Danish word (form, stem, synonym, ...) and link it from the main word."""
    if not text or not text.strip():
        return None

    sub_word = repository.upsert_word(
        session,
        text,
        DANISH,
        create={'source_entity_id': DICTIONARY_SOURCE.value}
    )
    repository.upsert_word_details(session, sub_word.id, part_of_speech, DICTIONARY_SOURCE)

    if sub_word.id == main_word.id:
        return sub_word

    for relationship_type in relationship_types:
        repository.upsert_relationship(
            session,
            main_word.id,
            sub_word.id,
            relationship_type,
            description=get_relationship_description(relationship_type),
            order_index=order_index
        )

    return sub_word


def _save_fixed_expression(session: Session, main_word: Word, expression: DanishFixedExpression):
    phrase_word = _link_sub_word(
        session, main_word, expression.expression, PartOfSpeech.phrase, [RelationshipType.phrase]
    )
    if phrase_word is None:
        return

    # Without a definition there is nothing to hang examples or translations on
    if not expression.definition:
        logger.debug(f"Fixed expression '{expression.expression}' has no definition")
        return

    details = repository.upsert_word_details(session, phrase_word.id, PartOfSpeech.phrase, DICTIONARY_SOURCE)
    _save_definition(session, details, expression)


def process_and_save_danish_word(session: Session, variant: WordVariant) -> Word:
    """
    Persist one Danish dictionary entry.

    Args:
        session: Session of the running import
        variant: The dictionary entry

    Returns:
        The entry's Word
    """
    word_data = variant.word
    text = word_data.word
    part_of_speech_tags = word_data.part_of_speech or []

    part_of_speech = map_danish_pos(part_of_speech_tags[0] if part_of_speech_tags else None)
    gender = map_danish_gender(part_of_speech_tags[1]) if len(part_of_speech_tags) > 1 else None
    variant_tag = word_data.variant or ''

    source_entity_id = f"{DICTIONARY_SOURCE.value}-{text}-{part_of_speech.value}-{variant_tag}"
    word_columns = {
        'phonetic_general': word_data.phonetic or None,
        'etymology': word_data.etymology or None,
        'source_entity_id': source_entity_id,
    }

    main_word = repository.upsert_word(session, text, DANISH, create=word_columns, update=word_columns)
    details = repository.upsert_word_details(
        session,
        main_word.id,
        part_of_speech,
        DICTIONARY_SOURCE,
        variant=variant_tag,
        phonetic=word_data.phonetic or None,
        gender=gender
    )

    for definition_entry in variant.definition:
        _save_definition(session, details, definition_entry)

        for label, relationship_type in LABEL_RELATIONSHIPS.items():
            for related_text in label_list(definition_entry.labels, label):
                _link_sub_word(session, main_word, related_text, PartOfSpeech.undefined, [relationship_type])

    for form in transform_danish_forms(text, word_data.forms, part_of_speech_tags, word_data.contextual_forms):
        _link_sub_word(session, main_word, form['word'], part_of_speech, form['relationships'])

    for stem in variant.stems:
        _link_sub_word(session, main_word, stem.stem, map_stem_pos(stem.part_of_speech), [RelationshipType.stem])

    for index, composition in enumerate(variant.compositions):
        _link_sub_word(
            session, main_word, composition.composition, PartOfSpeech.undefined,
            [RelationshipType.composition], order_index=index
        )

    for synonym in variant.synonyms:
        _link_sub_word(session, main_word, synonym, part_of_speech, [RelationshipType.synonym])

    for antonym in variant.antonyms:
        _link_sub_word(session, main_word, antonym, part_of_speech, [RelationshipType.antonym])

    for expression in variant.fixed_expressions:
        _save_fixed_expression(session, main_word, expression)

    logger.info(f"Saved Danish word '{text}' (id={main_word.id}, pos={part_of_speech.value}, variant={variant_tag!r})")
    return main_word


def _attach_entry_translations(
    session: Session,
    definition_id: int,
    entry: Union[DanishDefinition, DanishFixedExpression],
    context: str
) -> Dict[str, int]:
    counts = {'definition_translations': 0, 'example_translations': 0}

    if repository.attach_definition_translation(
        session, definition_id, entry.definition_translation_en, ENGLISH, TRANSLATION_SOURCE
    ):
        counts['definition_translations'] += 1

    examples, translations, _ = combine_examples(entry)
    stored = {row.example: row.id for row in repository.get_definition_examples(session, definition_id)}
    example_ids = [stored.get(example) for example in examples]

    counts['example_translations'] += repository.attach_example_translations(
        session, example_ids, translations, ENGLISH, TRANSLATION_SOURCE, context
    )
    return counts


def attach_fixed_expression_translations(
    session: Session,
    expression: DanishFixedExpression
) -> Dict[str, int]:
    """
    Attach the English translations of a fixed expression saved earlier in the import.

    The expression word and its definition are looked up by exact text. A miss is
    logged and the expression skipped.
    """
    counts = {'definition_translations': 0, 'example_translations': 0, 'skipped_expressions': 0}

    phrase_word = repository.find_word(session, expression.expression, DANISH) if expression.expression.strip() else None
    definition = None
    if phrase_word is not None and expression.definition:
        definition = repository.find_word_definition_by_text(session, phrase_word.id, expression.definition)

    if phrase_word is None or definition is None:
        logger.warning(
            f"No saved definition matches fixed expression '{expression.expression}' "
            f"(definition: {expression.definition!r}); translations skipped"
        )
        counts['skipped_expressions'] = 1
        return counts

    entry_counts = _attach_entry_translations(
        session, definition.id, expression, f"fixed expression '{expression.expression}'"
    )
    counts['definition_translations'] += entry_counts['definition_translations']
    counts['example_translations'] += entry_counts['example_translations']

    translated_text = expression.expression_translation_en
    if translated_text and isinstance(translated_text, str) and translated_text.strip():
        english_word = repository.upsert_word(
            session, translated_text, ENGLISH, create={'source_entity_id': TRANSLATION_SOURCE.value}
        )
        repository.upsert_relationship(session, phrase_word.id, english_word.id, RelationshipType.translation)

    return counts


def attach_variant_translations(session: Session, variant_word: Word, variant: WordVariant) -> Dict[str, int]:
    """
    Link the English translations bundled with a saved dictionary entry.

    Args:
        session: Session of the running import
        variant_word: Word returned by process_and_save_danish_word for the entry
        variant: The dictionary entry

    Returns:
        Counters: definition_translations, example_translations, skipped_expressions
    """
    counts = {'definition_translations': 0, 'example_translations': 0, 'skipped_expressions': 0}

    for definition_entry in variant.definition:
        definition = repository.find_word_definition_by_text(session, variant_word.id, definition_entry.definition)
        if definition is None:
            logger.warning(
                f"No saved definition matches {definition_entry.definition!r} of '{variant_word.word}'; "
                f"translations skipped"
            )
            continue

        entry_counts = _attach_entry_translations(
            session, definition.id, definition_entry, f"'{variant_word.word}' definition {definition.id}"
        )
        for key, value in entry_counts.items():
            counts[key] += value

    for expression in variant.fixed_expressions:
        for key, value in attach_fixed_expression_translations(session, expression).items():
            counts[key] += value

    return counts


def process_danish_variants(
    session: Session,
    source_word_id: int,
    danish_data: Optional[DanishDictionaryObject]
) -> Dict[str, Any]:
    """
    Save every variant of a Danish dictionary object and attach its translations.

    Each variant word is linked from the source word with a translation edge.

    Returns:
        variant_word_ids plus the summed translation counters
    """
    summary = {
        'variant_word_ids': [],
        'definition_translations': 0,
        'example_translations': 0,
        'skipped_expressions': 0,
    }

    if danish_data is None:
        return summary

    for variant in danish_data.variants:
        variant_word = process_and_save_danish_word(session, variant)
        summary['variant_word_ids'].append(variant_word.id)

        if variant_word.id != source_word_id:
            repository.upsert_relationship(session, source_word_id, variant_word.id, RelationshipType.translation)

        for key, value in attach_variant_translations(session, variant_word, variant).items():
            summary[key] += value

    return summary


def _variant_display(variant_data: Dict[str, Any]) -> str:
    word_data = variant_data.get('word') or {}
    return (
        f"word: {word_data.get('word')} variant: {word_data.get('variant', '')} "
        f"partOfSpeech: {word_data.get('partOfSpeech')} forms: {word_data.get('forms')}"
    )


def process_danish_variant(
    variant_data: Dict[str, Any],
    original_word: str,
    session: Optional[Session] = None
) -> Dict[str, Any]:
    """
    Save a single Danish dictionary entry and its English translations in one transaction.

    Args:
        variant_data: Raw dictionary entry
        original_word: Word the entry was looked up for, used in logs
        session: Session to use (defaults to the Flask-SQLAlchemy session)

    Returns:
        {'word_display', 'status': 'added' | 'error', 'language': 'da', 'word_id' | 'error'}
    """
    session = session or db.session
    result = {'word_display': _variant_display(variant_data), 'language': DANISH.value}

    try:
        validate_danish_dictionary({'variants': [variant_data]}, original_word)
        variant = WordVariant.model_validate(variant_data)
    except DictionaryValidationError as e:
        return {**result, 'status': 'error', 'error': str(e)}
    except ValidationError as e:
        logger.error(f"Invalid Danish variant for '{original_word}': {str(e)}")
        return {**result, 'status': 'error', 'error': f"Invalid variant data: {e.error_count()} errors"}

    try:
        apply_transaction_timeouts(session)
        variant_word = process_and_save_danish_word(session, variant)
        counts = attach_variant_translations(session, variant_word, variant)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        if is_transaction_conflict(e):
            logger.warning(f"Transaction conflict while saving Danish variant for '{original_word}': {str(e)}")
            return {**result, 'status': 'added', 'conflict': True}
        logger.error(f"Error saving Danish variant for '{original_word}': {str(e)}", exc_info=True)
        return {**result, 'status': 'error', 'error': f"Server error: {str(e)}"}

    logger.info(
        f"Added Danish variant '{variant.word.word}' for '{original_word}': "
        f"{counts['definition_translations']} definition translations, "
        f"{counts['example_translations']} example translations"
    )
    return {**result, 'status': 'added', 'word_id': variant_word.id}
