"""Builders for stored source words and translation service payloads."""

from unittest.mock import MagicMock

from models import db
from models.definition import Definition, DefinitionExample
from models.enums import PartOfSpeech, SourceType
from models.word import Word, WordDetails, WordDefinition


def create_source_word(text, language_code, definitions, phonetic=None):
    """
    Store a word with one noun entry and the given definitions.

    Args:
        definitions: [(definition_text, [example, ...]), ...]

    Returns:
        (word, [(definition, [example_row, ...]), ...])
    """
    word = Word(word=text, language_code=language_code, phonetic_general=phonetic)
    db.session.add(word)
    db.session.flush()

    details = WordDetails(word_id=word.id, part_of_speech=PartOfSpeech.noun, source=SourceType.user)
    db.session.add(details)
    db.session.flush()

    stored = []
    for index, (definition_text, examples) in enumerate(definitions):
        definition = Definition(definition=definition_text, language_code=language_code, source=SourceType.user)
        db.session.add(definition)
        db.session.flush()
        db.session.add(WordDefinition(word_details_id=details.id, definition_id=definition.id, is_primary=index == 0))

        example_rows = []
        for example in examples:
            row = DefinitionExample(definition_id=definition.id, example=example, language_code=language_code)
            db.session.add(row)
            db.session.flush()
            example_rows.append(row)
        stored.append((definition, example_rows))

    db.session.commit()
    return word, stored


def word_data_for(word, stored):
    """Source payload in the shape build_word_data returns."""
    return {
        'word': word.word,
        'language_code': word.language_code.value,
        'phonetic': word.phonetic_general,
        'stems': [],
        'definitions': [
            {
                'id': definition.id,
                'partOfSpeech': 'noun',
                'definition': definition.definition,
                'examples': [{'id': row.id, 'example': row.example} for row in examples],
            }
            for definition, examples in stored
        ],
    }


def english_word_data(word, word_translation, definitions, phonetic_translation='',
                      source_language='da', target_language='en'):
    """
    Build the `english_word_data` part of a translation service response.

    Args:
        definitions: [(definition_id, definition_translation, [(example_id, example_translation), ...]), ...]
    """
    return {
        'metadata': {
            'languageCode': source_language,
            'languageCode_translation': target_language,
            'sourceTranslator': 'Helsinki-NLP',
        },
        'word': {
            'wordId': word.id,
            'word': word.word,
            'phonetic': word.phonetic_general,
            'word_translation': word_translation,
            'phonetic_translation': phonetic_translation,
            'sourceTranslator': 'Helsinki-NLP',
            'word_variants': [],
            'relatedWords': [],
        },
        'definitions': [
            {
                'definitionId': definition_id,
                'partOfSpeech': 'noun',
                'definition': f'definition {definition_id}',
                'definition_translation': definition_translation,
                'examples': [
                    {'exampleId': example_id, 'example': f'example {example_id}', 'example_translation': translation}
                    for example_id, translation in examples
                ],
            }
            for definition_id, definition_translation, examples in definitions
        ],
        'stems': [],
        'stems_translation': [],
    }


def hund_variant(fixed_expression_definition='forfalde; gå til grunde'):
    """A Danish dictionary entry for "hund" with one definition and one fixed expression."""
    return {
        'word': {
            'word': 'hund',
            'phonetic': '[ˈhunˀ]',
            'partOfSpeech': ['substantiv', 'fælleskøn'],
            'forms': ['-en', '-e', '-ene'],
            'audio': [{'audio_url': 'https://example.com/hund.mp3', 'word': 'grundform'}],
            'etymology': 'norrønt hundr',
            'variant': '',
        },
        'definition': [
            {
                'id': '1',
                'definition': 'firbenet pattedyr der holdes som husdyr',
                'definition_translation_en': 'four-legged mammal kept as a pet',
                'examples': ['hunden gøede ad postbuddet'],
                'examples_translation_en': ['the dog barked at the postman'],
                'labels': {'Eksempler': ['en stor hund'], 'Synonymer': ['køter']},
                'labels_translation_en': {},
            }
        ],
        'fixed_expressions': [
            {
                'expression': 'gå i hundene',
                'expression_translation_en': 'go to the dogs',
                'definition': fixed_expression_definition,
                'definition_translation_en': 'decay; go to ruin',
                'examples': ['firmaet gik i hundene'],
                'examples_translation_en': ['the company went to the dogs'],
                'labels': {},
                'labels_translation_en': {},
            }
        ],
        'stems': [{'stem': 'hunde-', 'stem_translation_en': 'dog-', 'partOfSpeech': 'sb.'}],
    }


def mock_client(payload):
    client = MagicMock()
    client.translate_word_data.return_value = payload
    return client
