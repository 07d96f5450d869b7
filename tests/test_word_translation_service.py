"""
Tests for the translation import of a stored word

Covers:
1. Translated word, translation edge, definition and example translations
2. Re-running an import adds no rows
3. Existing translated word keeps its id, only the phonetic changes
4. Positional pairing of examples when counts differ
5. Rollback on database errors, tolerance of transaction conflicts
"""

import logging
import pytest
from unittest.mock import patch

from sqlalchemy.exc import IntegrityError, OperationalError

from models import db
from models.enums import LanguageCode, RelationshipType, SourceType
from models.translation import Translation, DefinitionTranslation, ExampleTranslation
from models.word import Word
from models.word_relationship import WordToWordRelationship
from services.dictionary_validator import DictionaryValidationError
from services.word_translation_service import (
    build_word_data,
    import_translations_for_word_id,
    process_translations_for_word,
)
from tests.payloads import create_source_word, english_word_data, hund_variant, mock_client, word_data_for


def hund_payload(hund, danish_data=None):
    word, stored = hund
    (first, first_examples), (second, second_examples) = stored
    return {
        'english_word_data': english_word_data(
            word,
            'dog',
            [
                (first.id, 'four-legged mammal kept as a pet', [(first_examples[0].id, 'the dog barked')]),
                (second.id, 'derogatory term for a person', [(second_examples[0].id, 'you stupid dog')]),
            ],
            phonetic_translation='dɒɡ'
        ),
        'translation_word_for_danish_dictionary': danish_data if danish_data is not None else {},
    }


def row_counts():
    return {
        'words': Word.query.count(),
        'relationships': WordToWordRelationship.query.count(),
        'translations': Translation.query.count(),
        'definition_translations': DefinitionTranslation.query.count(),
        'example_translations': ExampleTranslation.query.count(),
    }


def run_import(hund, payload):
    word, stored = hund
    return process_translations_for_word(word.id, word.word, word_data_for(word, stored), client=mock_client(payload))


def test_import_creates_translated_word_and_links(hund):
    """Scenario: 'hund' with two definitions of one example each"""
    word, stored = hund

    result = run_import(hund, hund_payload(hund))

    assert result is not None
    assert result.conflict is False
    assert result.definition_translations == 2
    assert result.example_translations == 2

    english_words = Word.query.filter_by(language_code=LanguageCode.en).all()
    assert len(english_words) == 1
    translated = english_words[0]
    assert translated.word == 'dog'
    assert translated.phonetic_general == 'dɒɡ'
    assert translated.etymology is None
    assert translated.source_entity_id == SourceType.helsinki_nlp.value
    assert result.translated_word_id == translated.id

    edges = WordToWordRelationship.query.all()
    assert len(edges) == 1
    assert edges[0].from_word_id == word.id
    assert edges[0].to_word_id == translated.id
    assert edges[0].type == RelationshipType.translation

    assert Translation.query.count() == 4
    assert Translation.query.filter_by(source=SourceType.helsinki_nlp, language_code=LanguageCode.en).count() == 4
    assert DefinitionTranslation.query.count() == 2
    assert ExampleTranslation.query.count() == 2

    first_definition, first_examples = stored[0]
    link = DefinitionTranslation.query.filter_by(definition_id=first_definition.id).one()
    assert link.translation.content == 'four-legged mammal kept as a pet'
    example_link = ExampleTranslation.query.filter_by(example_id=first_examples[0].id).one()
    assert example_link.translation.content == 'the dog barked'


def test_rerun_import_adds_no_rows(hund):
    run_import(hund, hund_payload(hund))
    after_first = row_counts()

    result = run_import(hund, hund_payload(hund))
    after_second = row_counts()

    assert after_second == after_first
    # Links are reported even when they already existed
    assert result.definition_translations == 2
    assert result.example_translations == 2


def test_existing_translated_word_only_updates_phonetic(hund):
    existing = Word(word='dog', language_code=LanguageCode.en, phonetic_general='dog-old',
                    etymology='Old English docga', source_entity_id='merriam_learners')
    db.session.add(existing)
    db.session.commit()
    existing_id = existing.id

    result = run_import(hund, hund_payload(hund))

    assert result.translated_word_id == existing_id
    assert Word.query.filter_by(word='dog', language_code=LanguageCode.en).count() == 1

    word = db.session.get(Word, existing_id)
    assert word.phonetic_general == 'dɒɡ'
    assert word.etymology == 'Old English docga'
    assert word.source_entity_id == 'merriam_learners'


def test_word_translated_to_itself_is_not_linked(hund, caplog):
    word, stored = hund
    (first, first_examples), (second, second_examples) = stored
    payload = hund_payload(hund)
    payload['english_word_data'] = english_word_data(
        word, 'hund',
        [(first.id, 'et firbenet husdyr', [(first_examples[0].id, 'hunden gøede')])],
        phonetic_translation='hund-new', target_language='da'
    )

    with caplog.at_level(logging.WARNING):
        result = run_import(hund, payload)

    assert result.translated_word_id is None
    assert result.definition_translations == 1
    assert Word.query.count() == 1
    assert db.session.get(Word, word.id).phonetic_general == '[ˈhunˀ]'
    assert WordToWordRelationship.query.count() == 0
    assert "Word translation of 'hund' is the word itself" in caplog.text


def test_identical_translations_are_shared(app):
    """Two definitions translated to the same text share one Translation row"""
    word, stored = create_source_word(
        'kat', LanguageCode.da,
        [('lille rovdyr', []), ('lille tamdyr', [])]
    )
    payload = {
        'english_word_data': english_word_data(
            word, 'cat',
            [(stored[0][0].id, 'small animal', []), (stored[1][0].id, 'small animal', [])]
        ),
        'translation_word_for_danish_dictionary': {},
    }

    process_translations_for_word(word.id, word.word, word_data_for(word, stored), client=mock_client(payload))
    process_translations_for_word(word.id, word.word, word_data_for(word, stored), client=mock_client(payload))

    assert Translation.query.filter_by(content='small animal').count() == 1
    assert DefinitionTranslation.query.count() == 2


def test_example_count_mismatch_pairs_minimum_and_warns(app, caplog):
    """Three source examples, two translations: two links and a warning about index 2"""
    word, stored = create_source_word(
        'løbe', LanguageCode.da,
        [('bevæge sig hurtigt', ['hun løber', 'de løb hjem', 'han er løbet'])]
    )
    definition, examples = stored[0]
    payload = {
        'english_word_data': english_word_data(
            word, 'run',
            [(definition.id, 'move fast', [(examples[0].id, 'she runs'), (examples[1].id, 'they ran home')])]
        ),
        'translation_word_for_danish_dictionary': {},
    }

    with caplog.at_level(logging.WARNING):
        result = process_translations_for_word(
            word.id, word.word, word_data_for(word, stored), client=mock_client(payload)
        )

    assert result.example_translations == 2
    assert ExampleTranslation.query.count() == 2
    assert ExampleTranslation.query.filter_by(example_id=examples[2].id).count() == 0
    assert 'index 2' in caplog.text


def test_examples_pair_by_position_not_by_id(app):
    """The translation at index i goes to the source example at index i"""
    word, stored = create_source_word('gå', LanguageCode.da, [('bevæge sig', ['vi går', 'vi gik'])])
    definition, examples = stored[0]
    payload = {
        'english_word_data': english_word_data(
            word, 'walk',
            [(definition.id, 'move', [(999, 'we walk'), (998, 'we walked')])]
        ),
        'translation_word_for_danish_dictionary': {},
    }

    process_translations_for_word(word.id, word.word, word_data_for(word, stored), client=mock_client(payload))

    assert ExampleTranslation.query.filter_by(example_id=examples[0].id).one().translation.content == 'we walk'
    assert ExampleTranslation.query.filter_by(example_id=examples[1].id).one().translation.content == 'we walked'


def test_empty_translations_are_skipped(hund):
    word, stored = hund
    payload = hund_payload(hund)
    payload['english_word_data']['definitions'][0]['definition_translation'] = ''
    payload['english_word_data']['definitions'][1]['examples'][0]['example_translation'] = ''

    result = run_import(hund, payload)

    assert result.definition_translations == 1
    assert result.example_translations == 1
    assert Translation.query.count() == 2


def test_unknown_definition_id_is_skipped_with_warning(hund, caplog):
    word, stored = hund
    payload = hund_payload(hund)
    payload['english_word_data']['definitions'][1]['definitionId'] = 424242

    with caplog.at_level(logging.WARNING):
        result = run_import(hund, payload)

    assert result.skipped_definitions == 1
    assert result.definition_translations == 1
    assert DefinitionTranslation.query.count() == 1
    assert '424242' in caplog.text


def test_no_translation_data_returns_none(hund, caplog):
    word, stored = hund

    with caplog.at_level(logging.WARNING):
        result = process_translations_for_word(
            word.id, word.word, word_data_for(word, stored), client=mock_client(None)
        )

    assert result is None
    assert Word.query.count() == 1
    assert 'No translation data returned for word: hund' in caplog.text


def test_validation_error_writes_nothing(hund):
    payload = hund_payload(hund, danish_data={'variants': [hund_variant()], 'unexpected_field': []})

    with pytest.raises(DictionaryValidationError) as exc_info:
        run_import(hund, payload)

    assert exc_info.value.field == 'root field'
    assert 'hund' in str(exc_info.value)
    assert row_counts() == {
        'words': 1,
        'relationships': 0,
        'translations': 0,
        'definition_translations': 0,
        'example_translations': 0,
    }


def test_blank_variant_word_is_rejected_before_writing(hund):
    variant = hund_variant()
    variant['word']['word'] = '   '

    with pytest.raises(DictionaryValidationError) as exc_info:
        run_import(hund, hund_payload(hund, danish_data={'variants': [variant]}))

    assert exc_info.value.field == 'word'
    assert Word.query.count() == 1
    assert Translation.query.count() == 0


def test_malformed_payload_raises_validation_error(hund):
    payload = hund_payload(hund)
    del payload['english_word_data']['definitions'][0]['definitionId']

    with pytest.raises(DictionaryValidationError):
        run_import(hund, payload)

    assert Translation.query.count() == 0


def test_database_error_rolls_back_whole_import(hund):
    with patch('services.word_translation_service.process_danish_variants') as process_variants:
        process_variants.side_effect = IntegrityError('INSERT INTO words', {}, Exception('duplicate key'))

        with pytest.raises(IntegrityError):
            run_import(hund, hund_payload(hund))

    assert row_counts() == {
        'words': 1,
        'relationships': 0,
        'translations': 0,
        'definition_translations': 0,
        'example_translations': 0,
    }


class SerializationFailure(Exception):
    pgcode = '40001'


def test_transaction_conflict_is_tolerated(hund, caplog):
    with patch('services.word_translation_service.process_danish_variants') as process_variants:
        process_variants.side_effect = OperationalError('UPDATE words', {}, SerializationFailure('could not serialize'))

        with caplog.at_level(logging.WARNING):
            result = run_import(hund, hund_payload(hund))

    assert result is not None
    assert result.conflict is True
    assert result.translated_word_id is None
    assert result.variant_word_ids == []
    assert result.definition_translations == 0
    assert result.example_translations == 0
    assert Word.query.filter_by(language_code=LanguageCode.en).count() == 0
    assert Translation.query.count() == 0
    assert WordToWordRelationship.query.count() == 0
    assert 'Transaction conflict' in caplog.text


def test_other_operational_errors_propagate(hund):
    with patch('services.word_translation_service.process_danish_variants') as process_variants:
        process_variants.side_effect = OperationalError('UPDATE words', {}, Exception('disk I/O error'))

        with pytest.raises(OperationalError):
            run_import(hund, hund_payload(hund))

    assert Translation.query.count() == 0


def test_import_with_danish_variants(app):
    """An English source word whose response bundles a Danish dictionary entry"""
    word, stored = create_source_word('dog', LanguageCode.en, [('a domestic animal', ['the dog barked'])])
    definition, examples = stored[0]
    payload = {
        'english_word_data': english_word_data(
            word, 'hund',
            [(definition.id, 'et husdyr', [(examples[0].id, 'hunden gøede')])],
            source_language='en', target_language='da'
        ),
        'translation_word_for_danish_dictionary': {'variants': [hund_variant()]},
    }

    result = process_translations_for_word(
        word.id, word.word, word_data_for(word, stored), client=mock_client(payload)
    )

    hund_word = Word.query.filter_by(word='hund', language_code=LanguageCode.da).one()
    assert result.translated_word_id == hund_word.id
    assert result.variant_word_ids == [hund_word.id]
    # One edge from the translated word, shared with the variant
    assert WordToWordRelationship.query.filter_by(
        from_word_id=word.id, type=RelationshipType.translation
    ).count() == 1
    # Source definition plus the variant definition and its fixed expression
    assert result.definition_translations == 3
    assert result.skipped_expressions == 0


def test_build_word_data(hund):
    word, stored = hund

    data = build_word_data(word.id)

    assert data['word'] == 'hund'
    assert data['language_code'] == 'da'
    assert data['phonetic'] == '[ˈhunˀ]'
    assert [definition['id'] for definition in data['definitions']] == [definition.id for definition, _ in stored]
    assert data['definitions'][0]['partOfSpeech'] == 'noun'
    assert data['definitions'][0]['examples'] == [{'id': stored[0][1][0].id, 'example': 'hunden gøede'}]


def test_build_word_data_unknown_word(app):
    assert build_word_data(12345) is None


def test_import_by_word_id(hund):
    word, stored = hund

    with patch('services.word_translation_service.TranslationClient') as client_class:
        client_class.return_value.translate_word_data.return_value = hund_payload(hund)
        result = import_translations_for_word_id(word.id)

    assert result.definition_translations == 2
    call_args = client_class.return_value.translate_word_data.call_args[0]
    assert call_args[0] == word.id
    assert call_args[1] == 'hund'
    assert len(call_args[3]) == 2


def test_import_by_unknown_word_id(app):
    with pytest.raises(LookupError):
        import_translations_for_word_id(999)
